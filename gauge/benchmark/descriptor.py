"""
Benchmark descriptor: the benchmark instance, its target method and its
lifecycle hooks, resolved once so workers only call pre-resolved handles.
"""

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Tuple, List, Dict, NewType

from ..errors import InvalidBenchmarkError

# Annotate the reps parameter with LongReps to request unbounded repetition counts.
LongReps = NewType("LongReps", int)

HOOK_ATTRIBUTE = "__gauge_hook__"


class HookRole(Enum):
    """Lifecycle role of a hook method."""
    BEFORE_EXPERIMENT = "before_experiment"
    AFTER_EXPERIMENT = "after_experiment"
    BEFORE_REP = "before_rep"
    AFTER_REP = "after_rep"


class RepsKind(Enum):
    """Repetition parameter accepted by a benchmark method."""
    NONE = "none"       # Macro benchmark, called once per measurement
    NARROW = "narrow"   # Bounded int reps
    WIDE = "wide"       # Unbounded LongReps


def _tag(role: HookRole) -> Callable[[Callable], Callable]:
    def decorator(func: Callable) -> Callable:
        setattr(func, HOOK_ATTRIBUTE, role)
        return func
    return decorator


before_experiment = _tag(HookRole.BEFORE_EXPERIMENT)
after_experiment = _tag(HookRole.AFTER_EXPERIMENT)
before_rep = _tag(HookRole.BEFORE_REP)
after_rep = _tag(HookRole.AFTER_REP)


def get_hook_methods(benchmark_class: type, role: HookRole) -> List[str]:
    """
    Get names of methods tagged with a hook role, in declared order.

    Base class hooks come first. A method overridden in a subclass keeps the
    position of the base declaration and is only listed if the override is
    itself tagged.
    """
    names: Dict[str, bool] = {}
    for klass in reversed(benchmark_class.__mro__):
        for name, member in vars(klass).items():
            if isinstance(member, (staticmethod, classmethod)):
                member = member.__func__
            if not callable(member):
                continue
            if getattr(member, HOOK_ATTRIBUTE, None) is role:
                names[name] = True
            elif name in names:
                names[name] = False
    return [name for name, tagged in names.items() if tagged]


def get_reps_kind(method: Callable) -> RepsKind:
    """Classify a bound benchmark method by its repetition parameter."""
    params = list(inspect.signature(method).parameters.values())
    if not params:
        return RepsKind.NONE
    if len(params) > 1:
        raise InvalidBenchmarkError(
            "%s takes %d parameters; benchmark methods take either no parameters or a single reps parameter",
            method.__qualname__, len(params),
        )
    annotation = params[0].annotation
    if annotation is LongReps or annotation == "LongReps":
        return RepsKind.WIDE
    return RepsKind.NARROW


@dataclass(frozen=True)
class BenchmarkDescriptor:
    """
    Everything a worker needs to run one benchmark method.

    Attributes:
        instance: The benchmark object
        method: Bound benchmark method
        reps_kind: Repetition parameter accepted by the method
        before_experiment: Hooks run once before the trial
        after_experiment: Hooks run once after the trial
        before_rep: Hooks run before each measurement (macro benchmarks)
        after_rep: Hooks run after each measurement (macro benchmarks)
    """
    instance: Any
    method: Callable
    reps_kind: RepsKind
    before_experiment: Tuple[Callable, ...] = ()
    after_experiment: Tuple[Callable, ...] = ()
    before_rep: Tuple[Callable, ...] = ()
    after_rep: Tuple[Callable, ...] = ()

    @property
    def class_name(self) -> str:
        return type(self.instance).__name__

    @property
    def method_name(self) -> str:
        return getattr(self.method, "__name__", repr(self.method))

    @property
    def name(self) -> str:
        return f"{self.class_name}.{self.method_name}"

    @classmethod
    def create(cls, benchmark_class: type, method_name: str) -> "BenchmarkDescriptor":
        """
        Instantiate a benchmark class and resolve its method and hooks.

        Args:
            benchmark_class: Class declaring the benchmark
            method_name: Name of the benchmark method

        Returns:
            BenchmarkDescriptor bound to a fresh instance

        Raises:
            InvalidBenchmarkError: If the method is missing or has an unsupported signature
        """
        if not callable(getattr(benchmark_class, method_name, None)):
            raise InvalidBenchmarkError(
                "%s has no benchmark method named %s", benchmark_class.__name__, method_name,
            )
        instance = benchmark_class()
        method = getattr(instance, method_name)

        def resolve(role: HookRole) -> Tuple[Callable, ...]:
            return tuple(getattr(instance, name) for name in get_hook_methods(benchmark_class, role))

        return cls(
            instance=instance,
            method=method,
            reps_kind=get_reps_kind(method),
            before_experiment=resolve(HookRole.BEFORE_EXPERIMENT),
            after_experiment=resolve(HookRole.AFTER_EXPERIMENT),
            before_rep=resolve(HookRole.BEFORE_REP),
            after_rep=resolve(HookRole.AFTER_REP),
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name}, reps={self.reps_kind.value})>"

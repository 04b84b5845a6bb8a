import io
import json
from datetime import datetime

import pytest
import requests
from rich.console import Console

from gauge.errors import ConfigurationError
from gauge.model import Measurement, Trial, Value
from gauge.output import Reporter, ResultsUploader
from gauge.runner import summarize


def make_trial(run_id="5f0c6c55-1b5a-4c36-9c76-9f1f5f7c2b11"):
    return Trial(
        benchmark="QuickBenchmark.time_sum",
        worker="micro",
        run_id=run_id,
        options={"timingIntervalNanos": "5000"},
        measurements=(
            Measurement("runtime", Value.create(5000, "ns"), weight=5),
            Measurement("runtime", Value.create(9000, "ns"), weight=6),
            Measurement("runtime", Value.create(6000, "ns"), weight=4),
        ),
        started_at=datetime(2026, 1, 1, 12, 0, 0),
        finished_at=datetime(2026, 1, 1, 12, 0, 2),
    )


# summarize

def test_summarize_weights_by_reps():
    summary = summarize(make_trial().measurements)

    assert summary.count == 3
    assert summary.total_reps == 15
    assert summary.weighted_mean == pytest.approx(20000 / 15)
    assert summary.min == 1000
    assert summary.median == 1500
    assert summary.max == 1500
    assert summary.unit == "ns/op"


def test_summarize_empty():
    summary = summarize([])

    assert summary.count == 0
    assert summary.weighted_mean == 0.0


# Reporter

@pytest.fixture
def reporter(tmp_path):
    return Reporter(tmp_path, console=Console(file=io.StringIO(), width=200))


def test_generate_json(reporter):
    path = reporter.generate_json([make_trial()], "results.json")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    assert "environment" in data
    trial = data["trials"][0]
    assert trial["benchmark"] == "QuickBenchmark.time_sum"
    assert len(trial["measurements"]) == 3
    assert trial["summary"]["total_reps"] == 15


def test_generate_markdown(reporter):
    path = reporter.generate_markdown([make_trial()], "report.md")

    with open(path, encoding="utf-8") as f:
        content = f.read()

    assert "# Benchmark Report" in content
    assert "| QuickBenchmark.time_sum | micro | 3 | 15 |" in content
    assert "timingIntervalNanos=5000" in content


def test_reporter_as_processor_writes_on_close(reporter):
    reporter.process_trial(make_trial())
    reporter.close()

    assert len(reporter.written) == 2
    assert {p.rsplit(".", 1)[-1] for p in reporter.written} == {"md", "json"}


def test_reporter_close_twice_does_not_repeat_paths(reporter):
    reporter.process_trial(make_trial())
    reporter.close()
    reporter.close()

    assert len(reporter.written) == 2


def test_reporter_close_without_trials(reporter):
    reporter.close()

    assert reporter.written == []


def test_print_summary(reporter):
    reporter.print_summary([make_trial()])

    output = reporter.console.file.getvalue()
    assert "QuickBenchmark.time_sum" in output
    assert "1.5μs" in output


# ResultsUploader

class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.posts = []

    def post(self, url, json=None, params=None, timeout=None):
        self.posts.append({"url": url, "json": json, "params": params, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def make_uploader(session, **kwargs):
    console = Console(file=io.StringIO(), width=200)
    return ResultsUploader(session=session, console=console, **kwargs)


def test_uploader_rejects_invalid_key():
    with pytest.raises(ConfigurationError, match="not valid"):
        make_uploader(FakeSession(), url="https://results.example.com", api_key="secret")


@pytest.mark.parametrize("url", ["results.example.com", "ftp://results.example.com", "https://"])
def test_uploader_rejects_invalid_url(url):
    with pytest.raises(ConfigurationError, match="invalid upload url"):
        make_uploader(FakeSession(), url=url)


def test_uploader_without_url_does_nothing():
    session = FakeSession()
    uploader = make_uploader(session)

    uploader.process_trial(make_trial())
    uploader.close()

    assert not uploader.enabled
    assert session.posts == []
    assert uploader.console.file.getvalue() == ""


def test_uploader_posts_trial_with_key():
    key = "2b1bd1f4-5d6f-4f0e-8a4e-0c9b5b1e7f00"
    session = FakeSession()
    uploader = make_uploader(session, url="https://results.example.com/app/", api_key=key)
    trial = make_trial()

    uploader.process_trial(trial)
    uploader.close()

    post = session.posts[0]
    assert post["url"] == "https://results.example.com/data/trials"
    assert post["params"] == {"key": key}
    assert post["json"] == [trial.to_dict()]
    assert post["timeout"] == 10
    assert uploader.run_id == trial.run_id
    assert uploader.results_url() == f"https://results.example.com/runs/{trial.run_id}"
    assert "Results have been uploaded" in uploader.console.file.getvalue()


def test_uploader_anonymous_upload():
    session = FakeSession()
    uploader = make_uploader(session, url="http://localhost:8080")

    uploader.process_trial(make_trial())

    assert session.posts[0]["params"] is None


@pytest.mark.parametrize("session", [
    FakeSession(error=requests.ConnectionError("refused")),
    FakeSession(error=requests.Timeout("slow")),
    FakeSession(response=FakeResponse(500)),
])
def test_uploader_logs_failures_and_continues(session, caplog):
    uploader = make_uploader(session, url="https://results.example.com")
    trial = make_trial()

    uploader.process_trial(trial)
    uploader.close()

    assert uploader.failure
    assert uploader.run_id is None
    assert f"Could not upload trial {trial.id}" in caplog.text
    assert "Some trials failed to upload" in uploader.console.file.getvalue()

"""
Result processor that uploads JSON-serialized trials to a results server.
"""

import logging
import uuid
from typing import Optional
from urllib.parse import urljoin, urlparse

import requests
from rich.console import Console

from ..errors import ConfigurationError
from ..model import Trial

logger = logging.getLogger(__name__)

POST_PATH = "/data/trials"
RESULTS_PATH_PATTERN = "/runs/{run_id}"


class ResultsUploader:
    """
    Upload each trial to a results server as soon as it completes.

    Configuration:
        - url: Base URL of the results server; without it nothing is uploaded
        - api_key: UUID sent as the 'key' query parameter; without it uploads are anonymous

    Upload failures are logged and never interrupt the run.

    Example:
        uploader = ResultsUploader(url="https://results.example.com/")
        uploader.process_trial(trial)
        uploader.close()
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
        console: Optional[Console] = None,
    ):
        """
        Initialize uploader.

        Args:
            url: Results server base URL
            api_key: API key (a UUID string)
            session: HTTP session (default: new requests.Session)
            timeout: Request timeout in seconds
            console: Console for the closing message

        Raises:
            ConfigurationError: If the key is not a UUID or the URL is malformed
        """
        self.session = session or requests.Session()
        self.timeout = timeout
        self.console = console or Console()
        self.run_id: Optional[str] = None
        self.failure = False

        self.api_key: Optional[uuid.UUID] = None
        if not api_key:
            logger.info("No api key specified. Uploading results anonymously.")
        else:
            try:
                self.api_key = uuid.UUID(api_key)
            except ValueError:
                raise ConfigurationError(
                    f"The specified API key ({api_key}) is not valid. "
                    f"API keys are UUIDs and should look like {uuid.UUID(int=0)}."
                ) from None

        self.upload_url: Optional[str] = None
        if not url:
            logger.info("No upload URL was specified. Results will not be uploaded.")
        else:
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ConfigurationError(f"{url} is an invalid upload url")
            self.upload_url = urljoin(url, POST_PATH)

    @property
    def enabled(self) -> bool:
        return self.upload_url is not None

    def process_trial(self, trial: Trial) -> None:
        """Upload a single trial."""
        if not self.enabled:
            return

        params = {"key": str(self.api_key)} if self.api_key else None
        try:
            response = self.session.post(
                self.upload_url,
                json=[trial.to_dict()],
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            self._log_upload_failure(trial, e)
            logger.debug(f"Failed upload response: {e.response.status_code if e.response is not None else 'N/A'}")
            return
        except requests.RequestException as e:
            self._log_upload_failure(trial, e)
            return

        # Only remember the run once a result has been uploaded
        self.run_id = trial.run_id
        logger.debug(f"Uploaded trial {trial.id}")

    def _log_upload_failure(self, trial: Trial, error: Exception) -> None:
        self.failure = True
        logger.error(
            f"Could not upload trial {trial.id}. Consider uploading it manually. ({error})"
        )

    def results_url(self) -> Optional[str]:
        """URL where the uploaded run can be viewed."""
        if not self.enabled or not self.run_id:
            return None
        return urljoin(self.upload_url, RESULTS_PATH_PATTERN.format(run_id=self.run_id))

    def close(self) -> None:
        if not self.enabled:
            logger.debug("No upload URL was provided, so results were not uploaded.")
            return
        if self.run_id:
            self.console.print(f"Results have been uploaded. View them at: {self.results_url()}")
        if self.failure:
            self.console.print("Some trials failed to upload. Consider uploading them manually.")

import logging
import time

import requests

from .config import Settings
from .errors import RequestFailed
from .retry import RetryPolicy

logger = logging.getLogger(__name__)


def _data_envelope(body):
    if isinstance(body, dict) and isinstance(body.get("data"), list):
        return body["data"]
    return None


def _patients_envelope(body):
    if isinstance(body, dict) and isinstance(body.get("patients"), list):
        return body["patients"]
    return None


def _bare_list(body):
    if isinstance(body, list):
        return body
    return None


# tried in order, first match wins
ENVELOPES = (_data_envelope, _patients_envelope, _bare_list)


def extract_patients(body):
    """Return the patient list wrapped in ``body``, or None if no shape matches."""
    for envelope in ENVELOPES:
        patients = envelope(body)
        if patients is not None:
            return patients
    return None


class AssessmentClient:
    def __init__(self, settings: Settings, session=None, sleep=time.sleep):
        settings.require_api_key()
        self.settings = settings
        self.policy = RetryPolicy.from_settings(settings)
        self.sleep = sleep
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(settings.headers)

    def _url(self, path):
        return f"{self.settings.base_url.rstrip('/')}{path}"

    def get_json(self, path, params=None):
        url = self._url(path)

        def send():
            r = self.session.get(url, params=params, timeout=self.settings.timeout)
            r.raise_for_status()
            return r.json()

        return self.policy.run(send, label=f"GET {path}", sleep=self.sleep)

    def post_json(self, path, body):
        url = self._url(path)

        def send():
            r = self.session.post(url, json=body, timeout=self.settings.timeout)
            r.raise_for_status()
            return r.json()

        return self.policy.run(send, label=f"POST {path}", sleep=self.sleep)

    def fetch_all_patients(self):
        """Fetch every page of patients in order.

        A page that fails after all retries is logged and skipped. Fetching
        stops on an empty or short page, or after ``max_pages`` pages.
        """
        settings = self.settings
        patients = []
        page = 1
        while page <= settings.max_pages:
            logger.info("Fetching page %d", page)
            try:
                body = self.get_json(
                    "/patients", params={"page": page, "limit": settings.page_size}
                )
            except RequestFailed as exc:
                logger.error("Failed to fetch page %d, continuing to next page: %s", page, exc)
                page += 1
                if page <= settings.max_pages:
                    self.sleep(settings.failed_page_delay)
                continue

            batch = extract_patients(body)
            if batch is None:
                logger.warning("Page %d: unrecognized response shape, treating as empty", page)
                batch = []
            if not batch:
                break

            patients.extend(batch)
            logger.info("Page %d: got %d patients (total: %d)", page, len(batch), len(patients))
            if len(batch) < settings.page_size:
                break
            page += 1
            self.sleep(settings.page_delay)

        logger.info("Total patients: %d", len(patients))
        return patients

    def submit_assessment(self, result):
        payload = result.to_payload() if hasattr(result, "to_payload") else dict(result)
        logger.info("Submitting results")
        return self.post_json("/submit-assessment", payload)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

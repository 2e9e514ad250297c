from __future__ import annotations

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from client.models import ModelMetadata
from config.settings import get_settings


logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("role", "textSample", "address")


class ModelDirectory:
    """Reads the published persona models from the remote content store.

    The store currently serves a single fixed record, so ``fetch_models``
    returns zero or one entries. Failures never propagate: the caller just
    sees an empty list.
    """

    def __init__(
        self,
        metadata_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        settings = get_settings()
        self.metadata_url = metadata_url or settings.model_directory_url
        self.timeout = timeout if timeout is not None else settings.directory_timeout
        self._transport = transport

    def fetch_models(self) -> List[ModelMetadata]:
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(self.metadata_url)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Error fetching models from %s: %s", self.metadata_url, exc)
            return []

        if not isinstance(data, dict):
            logger.warning("Model directory returned %s, expected an object", type(data).__name__)
            return []

        missing = [key for key in REQUIRED_KEYS if not data.get(key)]
        if missing:
            logger.warning("Model record is missing %s", ", ".join(missing))
            return []

        try:
            model = ModelMetadata.model_validate(data)
        except ValidationError as exc:
            logger.warning("Model record failed validation: %s", exc)
            return []

        logger.info("Loaded model %s", model.display_name)
        return [model]

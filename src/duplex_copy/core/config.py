"""Configuration management for duplex_copy.

This module provides the DuplexCopyConfig class describing how to reach a
table store and how the engine should behave. It can be built directly or
composed through hydra-zen (see duplex_copy.cli).

The configuration handles:
    - Store connection settings (base_url, app_id, app_secret, app_token)
    - Batch sizing (page_size) and HTTP timeout
    - Logging levels for duplex_copy and the libraries underneath it

Example:
    >>> config = DuplexCopyConfig(
    ...     app_id='cli_a1b2c3',
    ...     app_secret='secret',
    ...     app_token='bascnXXXX',
    ... )
    >>> service = BitableTableService.from_config(config)
"""

import logging
from typing import Any

from pydantic import BaseModel, model_validator

from duplex_copy.core.constants import DEFAULT_BASE_URL, DEFAULT_PAGE_SIZE
from duplex_copy.core.exceptions import DuplexCopyConfigurationError


class DuplexCopyConfig(BaseModel):
    """Configuration model for duplex_copy.

    Attributes:
        app_id: Application id used to obtain a tenant access token.
        app_secret: Application secret paired with app_id.
        app_token: Token of the base (the workspace holding the tables).
        base_url: Root of the open API. Defaults to the public endpoint.
        page_size: Minimum number of records requested when a child table is read.
        request_timeout: HTTP timeout in seconds.
        logging_level: Logging level for duplex_copy. Defaults to WARNING.
        library_logging_level: Logging level for urllib3/requests/hydra. Defaults to WARNING.

    Example:
        >>> config = DuplexCopyConfig(app_token='bascnXXXX', logging_level=logging.INFO)
    """

    app_id: str | None = None
    app_secret: str | None = None
    app_token: str | None = None
    base_url: str = DEFAULT_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    request_timeout: float = 30.0
    logging_level: Any = logging.WARNING
    library_logging_level: Any = logging.WARNING

    @model_validator(mode="after")
    def check_limits(self) -> "DuplexCopyConfig":
        """Reject sizes and timeouts that can never work.

        Returns:
            Self: The validated configuration with a normalized base_url.
        """
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
        self.base_url = self.base_url.rstrip("/")
        return self

    def require_credentials(self) -> None:
        """Ensure everything needed to talk to the REST API is present.

        Raises:
            DuplexCopyConfigurationError: If app_id, app_secret or app_token is missing.
        """
        missing = [name for name in ("app_id", "app_secret", "app_token") if not getattr(self, name)]
        if missing:
            raise DuplexCopyConfigurationError(f"Missing configuration values: {', '.join(missing)}")

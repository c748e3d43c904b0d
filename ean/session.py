"""Customer session state shared across a sequence of EAN calls."""

import logging
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Session(BaseModel):
    """Vendor session correlating calls made for one end user.

    Mutable: ``id`` is overwritten after each response that carries a
    ``customerSessionId``.
    """

    id: str | None = Field(default=None, description="customerSessionId issued by EAN")
    ip_address: str | None = Field(default=None, description="End user IP address")
    locale: str | None = Field(default=None, description="Locale, e.g. en_US")
    currency_code: str | None = Field(default=None, description="ISO 4217 currency code")
    user_agent: str | None = Field(default=None, description="End user browser user agent")


def update_session(data: dict[str, Any], session: Session | None = None) -> Session:
    """Copy the response's ``customerSessionId`` into the session.

    Args:
        data: Parsed JSON response.
        session: Session to update; a new one is created when omitted.

    Returns:
        The updated session.
    """
    if session is None:
        session = Session()
    if not isinstance(data, dict) or not data:
        return session

    body = data[next(iter(data))]
    if isinstance(body, dict) and body.get("customerSessionId") is not None:
        session.id = str(body["customerSessionId"])
        logger.debug("[EAN] session id updated")
    return session

"""Inbound email message as handed over by a mail transport."""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union


@dataclass
class InboundEmail:
    """Ephemeral view of one received message.

    Attributes:
        to: One raw recipient string or a sequence of them
        subject: Subject header value, if any
        raw: Body stream with a ``read()`` method; consumed at most once
        message_id: Message-ID header, used for log correlation only
    """
    to: Union[str, Sequence[str], None]
    subject: Optional[str] = None
    raw: Optional[Any] = field(default=None, repr=False)
    message_id: Optional[str] = None

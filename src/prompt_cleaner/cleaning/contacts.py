"""
Contact redaction: URLs and email addresses are replaced by placeholders.
"""

import re
from typing import Tuple

from ..models.rules import CONTACTS_EMAIL, CONTACTS_URL, RuleCounter

URL_PLACEHOLDER = "<URL>"
EMAIL_PLACEHOLDER = "<EMAIL>"


class ContactRedactor:
    """
    Detects and replaces contact details with placeholder tokens.

    URLs are redacted before emails so an address embedded in a URL query is
    covered by the single <URL> placeholder.
    """

    def __init__(self, counter: RuleCounter):
        self.counter = counter

        # http(s):// or www. up to whitespace/brackets/quotes; trailing
        # sentence punctuation is not part of the URL
        self._url_pattern = re.compile(
            r"(?<![\w@.])(?:https?://|www\.)[^\s<>\"'()\[\]]*[^\s<>\"'()\[\].,;:!?]"
        )

        # Email pattern (RFC 5322 simplified). Matching starts only where a run
        # of address characters starts; leading punctuation is kept as text.
        self._email_pattern = re.compile(
            r"(?<![A-Za-z0-9._%+-])(?P<lead>[.%+-]*)"
            r"[A-Za-z0-9_][A-Za-z0-9._%+-]*@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"
        )

    def redact_text(self, text: str) -> str:
        """
        Redact URLs, then emails.

        Args:
            text: Input text

        Returns:
            Text with <URL> and <EMAIL> placeholders
        """
        text, urls = self.redact_urls(text)
        self.counter.hit(CONTACTS_URL, urls)
        text, emails = self.redact_emails(text)
        self.counter.hit(CONTACTS_EMAIL, emails)
        return text

    def redact_urls(self, text: str) -> Tuple[str, int]:
        return self._url_pattern.subn(URL_PLACEHOLDER, text)

    def redact_emails(self, text: str) -> Tuple[str, int]:
        return self._email_pattern.subn(lambda m: m.group("lead") + EMAIL_PLACEHOLDER, text)


def redact_contacts(text: str, counter: RuleCounter) -> str:
    """Replace URLs with <URL> and email addresses with <EMAIL>."""
    return ContactRedactor(counter).redact_text(text)

"""Abstract interface for AI text-generation transports."""

from typing import Protocol

from ..adapters.llm.http import BackendRequest


class TextGenerator(Protocol):
    """Transport that executes a prepared backend request.

    The dispatcher decides *what* to send (URL, headers, body, timeout and
    where the text lives in the reply); a TextGenerator decides *how*. The
    HTTP implementation is ``HTTPTextGenerator``; tests may supply fakes.
    """

    def generate(self, request: BackendRequest) -> str:
        """
        Issue the request once and return the generated text.

        Args:
            request: Fully prepared backend request

        Returns:
            Generated text verbatim (may be empty)

        Raises:
            RequestFailedError: On network error, timeout, non-2xx status,
                malformed JSON or a missing response field
        """
        ...

    def probe(self, url: str, timeout: float) -> bool:
        """
        Check that a service answers at ``url``.

        Args:
            url: Health endpoint to GET
            timeout: Seconds before giving up

        Returns:
            True if the service answered with a 2xx status
        """
        ...

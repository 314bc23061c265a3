"""Translation sessions: request a sentence, then format the response."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Set

from .errors import TranslationInProgressError
from .formatter import DEFAULT_MAX_LINE_LENGTH, format_translation
from .languages import Language, get_language
from .providers import TranslationRequester, build_prompt
from .structures import FormatResult

log = logging.getLogger(__name__)


@dataclass
class TranslationOutcome:
    """Report returned after translating one message."""

    message_id: str
    sentence: str
    raw_text: str
    result: FormatResult
    elapsed_seconds: float

    @property
    def text(self) -> str:
        return self.result.text


class TranslationSession:
    """Holds the selected languages and the messages being translated.

    At most one request per message id may be in flight; a second call for
    the same id raises :class:`TranslationInProgressError`.
    """

    def __init__(
        self,
        requester: TranslationRequester,
        *,
        source: Language,
        target: Language,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        model: str | None = None,
    ) -> None:
        self.requester = requester
        self.source = source
        self.target = target
        self.max_line_length = max_line_length
        self.model = model

        self._lock = threading.Lock()
        self._in_flight: Set[str] = set()

    def select_target(self, identifier: str) -> Language:
        self.target = get_language(identifier)
        return self.target

    def is_in_flight(self, message_id: str) -> bool:
        with self._lock:
            return message_id in self._in_flight

    def translate(self, message_id: str, sentence: str) -> TranslationOutcome:
        with self._lock:
            if message_id in self._in_flight:
                raise TranslationInProgressError(
                    f"Message {message_id} is already being translated."
                )
            self._in_flight.add(message_id)

        start_time = time.time()
        try:
            source, target = self.source, self.target
            log.info(
                "Translating message %s from %s to %s.",
                message_id,
                source.name,
                target.name,
            )
            raw_text = self.requester.request(
                sentence,
                source=source,
                target=target,
                prompt=build_prompt(source, target),
                model=self.model,
            )
        finally:
            with self._lock:
                self._in_flight.discard(message_id)

        result = format_translation(raw_text, self.max_line_length)
        if not result.ok:
            log.info(
                "Showing message %s unformatted (%s).",
                message_id,
                result.reason.value if result.reason else "unknown",
            )
        return TranslationOutcome(
            message_id=message_id,
            sentence=sentence,
            raw_text=raw_text,
            result=result,
            elapsed_seconds=time.time() - start_time,
        )

"""Turn free text into event drafts with Google's Gemini API."""

import json
import logging
import time
from datetime import date
from string import Formatter
from typing import Any, Callable, Dict, Optional, Protocol

from chronoplan.config.settings import API_CONFIG, APIConfig
from chronoplan.config.constants import (
    STATUS_ATTEMPTING,
    STATUS_SUCCESS,
    STATUS_MAX_RETRIES,
    STATUS_NON_RETRYABLE,
    STATUS_RETRYING,
)
from chronoplan.core.event_model import EventColor
from chronoplan.core.retry import is_retryable_error, is_api_key_error, wrap_api_key_error
from chronoplan.exceptions.errors import (
    CalendarAPIError,
    IntentParseError,
    RetryExhaustedError,
)
from chronoplan.utils.masking import mask_key

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


class IntentParser(Protocol):
    """Anything that turns free text into an event draft.

    ``parse`` returns a mapping in the draft shape (``title``,
    ``startDate``, ``endDate``, optional ``startTime``/``endTime``/
    ``description``, ``color``) or raises ``IntentParseError``.
    """

    def parse(self, text: str) -> Dict[str, Any]:
        ...


# Structured output schema for the model's JSON answer
RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "description": {"type": "STRING"},
        "startDate": {"type": "STRING", "description": "ISO 8601 date string (YYYY-MM-DD)"},
        "endDate": {"type": "STRING", "description": "ISO 8601 date string (YYYY-MM-DD)"},
        "startTime": {"type": "STRING", "description": "24-hour format HH:mm"},
        "endTime": {"type": "STRING", "description": "24-hour format HH:mm"},
        "color": {
            "type": "STRING",
            "format": "enum",
            "enum": [color.value for color in EventColor],
        },
    },
    "required": ["title", "startDate", "endDate", "color"],
}


def _silent(_message: str) -> None:
    pass


class GeminiIntentParser:
    """Intent parser backed by a Gemini generative model."""

    SYSTEM_PROMPT = """
You extract a single calendar event from a short piece of text and return it as a JSON object.

- If the year is not specified, assume the current year or the next occurrence.
- If it's a single day event, startDate and endDate should be the same.
- Dates are YYYY-MM-DD, times are 24-hour HH:mm.
- If no duration is specified, assume 1 hour.
- Suggest a color based on the context (e.g., red for urgent/important, green for money/work, blue for general).
- Return ONLY the JSON object, with no introductory text or explanations.
"""

    USER_PROMPT_TEMPLATE = """
Extract event details from this text: "{event_text}"

Today's date is {day_name}, {iso_date}.
"""

    def __init__(
        self,
        api_key: str,
        model: Any = None,
        config: APIConfig = API_CONFIG,
        today_provider: Callable[[], date] = date.today,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the parser.

        Args:
            api_key: The Gemini API key.
            model: A ready model exposing ``generate_content``. When omitted
                one is built with ``google.generativeai``.
            config: Model and retry settings.
            today_provider: Source of "today" for relative dates.
            sleep: Backoff sleep function.
        """
        self.api_key_masked = mask_key(api_key)
        self.config = config
        self.today_provider = today_provider
        self.sleep = sleep

        self._validate_prompt_template()

        if model is None:
            # Import genai here for lazy loading
            import google.generativeai as genai

            genai.configure(api_key=api_key)
            model = genai.GenerativeModel(
                model_name=config.model_name,
                generation_config={
                    "temperature": config.temperature,
                    "top_p": config.top_p,
                    "top_k": config.top_k,
                    "max_output_tokens": config.max_output_tokens,
                    "response_mime_type": "application/json",
                    "response_schema": RESPONSE_SCHEMA,
                },
                system_instruction=self.SYSTEM_PROMPT,
            )
            logger.debug("Created Gemini model %s (key %s)", config.model_name, self.api_key_masked)
        self.model = model

    def _validate_prompt_template(self) -> None:
        template_keys = {
            fn for _, fn, _, _ in Formatter().parse(self.USER_PROMPT_TEMPLATE) if fn
        }
        required_keys = {"event_text", "day_name", "iso_date"}
        if template_keys != required_keys:
            raise ValueError(
                f"Template mismatch! Expected keys {required_keys} but got {template_keys}"
            )

    def build_prompt(self, text: str) -> str:
        today = self.today_provider()
        return self.USER_PROMPT_TEMPLATE.format(
            event_text=text.replace('"', "'"),
            day_name=today.strftime("%A"),
            iso_date=today.isoformat(),
        )

    def parse(self, text: str, status_callback: Optional[StatusCallback] = None) -> Dict[str, Any]:
        """Ask the model for an event draft describing ``text``.

        Args:
            text: Free-form event description.
            status_callback: Optional progress reporter.

        Returns:
            The draft mapping, not yet validated.

        Raises:
            IntentParseError: If the text is blank or the model gives no
                usable answer.
            CalendarAPIError: If the API key is rejected.
            RetryExhaustedError: If transient failures outlast the retries.
        """
        if not text or not text.strip():
            raise IntentParseError("Nothing to parse: the event text is empty.")

        report = status_callback or _silent
        prompt = self.build_prompt(text.strip())
        max_retries = self.config.max_retries

        for attempt in range(max_retries):
            try:
                report(STATUS_ATTEMPTING.format(attempt=attempt + 1, max_retries=max_retries))
                logger.debug("Attempt %d/%d", attempt + 1, max_retries)

                response_text = self._call_api(prompt)
                draft = self._parse_response(response_text)

                report(STATUS_SUCCESS.format(title=draft.get("title", "")))
                return draft

            except CalendarAPIError:
                raise
            except Exception as e:
                if not self._handle_retry(e, attempt, report):
                    raise IntentParseError(
                        f"Failed to understand the event: {e}"
                    ) from e

        # Only reached when max_retries is zero
        raise RetryExhaustedError(attempts=max_retries)

    def _call_api(self, prompt: str) -> str:
        logger.debug("Generated API prompt (first 200 chars): %s", prompt[:200])
        response = self.model.generate_content(prompt)

        response_text = self._extract_text(response)
        if not response_text:
            raise ValueError("Received empty response from API")

        logger.debug("Raw API Response: %s", response_text)
        return response_text

    def _extract_text(self, response: Any) -> Optional[str]:
        """Extract text from an API response, tolerating blocked candidates."""
        try:
            text = getattr(response, "text", None)
        except ValueError as e:
            # google-generativeai raises when the candidate has no text part
            logger.warning("Response carried no text: %s", e)
            return None
        if text is not None:
            return text

        parts = getattr(response, "parts", None) or []
        joined = "".join(part.text for part in parts if hasattr(part, "text"))
        return joined or None

    def _parse_response(self, response_text: str) -> Dict[str, Any]:
        """Decode the model's JSON answer into a single draft.

        Raises:
            ValueError: If the text is not JSON or not one event object.
        """
        cleaned = response_text.strip()
        if cleaned.startswith("```"):
            first_newline = cleaned.find("\n")
            cleaned = cleaned[first_newline + 1:] if first_newline != -1 else cleaned[3:]
            if cleaned.endswith("```"):
                cleaned = cleaned[:-3]
            cleaned = cleaned.strip()

        try:
            payload = json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.debug("Received text was: %s", cleaned)
            raise ValueError(f"LLM returned invalid JSON: {e}") from e

        if isinstance(payload, list) and len(payload) == 1:
            payload = payload[0]
        if not isinstance(payload, dict):
            raise ValueError(f"LLM returned invalid JSON shape: {type(payload).__name__}")
        return payload

    def _handle_retry(self, error: Exception, attempt: int, report: StatusCallback) -> bool:
        """Decide whether to try again after ``error``.

        Returns:
            True after sleeping for the backoff delay, False if the error is
            permanent.

        Raises:
            CalendarAPIError: If this is an API key error.
            RetryExhaustedError: If max retries reached.
        """
        logger.debug(
            "Exception on attempt %d: %s (%s)",
            attempt + 1, error, type(error).__name__
        )

        if is_api_key_error(error):
            raise wrap_api_key_error(error, self.api_key_masked) from error

        if not is_retryable_error(error):
            logger.debug("Non-retryable error detected: %s", type(error).__name__)
            report(STATUS_NON_RETRYABLE.format(error_type=type(error).__name__))
            return False

        if attempt >= self.config.max_retries - 1:
            logger.warning("Max retries reached: %s", error)
            report(STATUS_MAX_RETRIES)
            raise RetryExhaustedError(
                attempts=self.config.max_retries,
                last_error=error
            ) from error

        delay = min(self.config.base_delay * (2 ** attempt), self.config.max_backoff)
        report(STATUS_RETRYING.format(error_type=type(error).__name__, delay=delay))
        logger.debug("Retrying in %.0f seconds...", delay)
        self.sleep(delay)
        return True

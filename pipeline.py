import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from keyword_extractor import KeywordResult, extract_keywords, categorize_keywords
from page_fetcher import (
    DEFAULT_TIMEOUT,
    FetchError,
    InsufficientContentError,
    fetch_page_text,
)

logger = logging.getLogger(__name__)


class ExtractionState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    CATEGORIZING = "categorizing"
    DONE = "done"
    FAILED = "failed"


class ErrorKind(Enum):
    INVALID_INPUT = "invalid_input"
    FETCH_FAILURE = "fetch_failure"
    INSUFFICIENT_CONTENT = "insufficient_content"
    UNEXPECTED_FAILURE = "unexpected_failure"


@dataclass
class ExtractionOutcome:
    state: ExtractionState
    result: Optional[KeywordResult] = None
    error: Optional[ErrorKind] = None
    detail: str = ""

    @property
    def ok(self):
        return self.state is ExtractionState.DONE


def _failed(kind, detail):
    return ExtractionOutcome(ExtractionState.FAILED, error=kind, detail=detail)


def run_extraction(url, fetcher=fetch_page_text, timeout=DEFAULT_TIMEOUT):
    """Fetch a posting and categorize its keywords.

    Expected failures come back as a FAILED outcome instead of raising.
    Each call is a single attempt.
    """
    state = ExtractionState.IDLE
    try:
        state = ExtractionState.FETCHING
        text = fetcher(url, timeout=timeout)

        state = ExtractionState.EXTRACTING
        candidates = extract_keywords(text)

        state = ExtractionState.CATEGORIZING
        result = categorize_keywords(candidates)
    except InsufficientContentError as e:
        logger.warning("insufficient content at %s: %s", url, e)
        return _failed(ErrorKind.INSUFFICIENT_CONTENT, str(e))
    except FetchError as e:
        logger.warning("fetch failed for %s: %s", url, e)
        return _failed(ErrorKind.FETCH_FAILURE, str(e))
    except Exception as e:
        logger.exception("extraction failed for %s while %s", url, state.value)
        return _failed(ErrorKind.UNEXPECTED_FAILURE, str(e))

    logger.info(
        "extracted %d candidates from %s -> %d keywords",
        len(candidates), url, len(result.all_keywords()),
    )
    return ExtractionOutcome(ExtractionState.DONE, result=result)

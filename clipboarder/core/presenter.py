"""
Default result presenter.

Renders short notification texts for upload outcomes. Hosts with their
own wording or locale implement the ResultPresenter protocol instead.
"""
from .share.models import PayloadKind
from .upload.models import ErrorKind, Failure, UploadOutcome


class DefaultResultPresenter:
    """
    English notification texts.

    Example:
        >>> presenter = DefaultResultPresenter()
        >>> presenter.present(PayloadKind.SINGLE_TEXT, Success())
        'Text copied'
    """

    def present(self, kind: PayloadKind, outcome: UploadOutcome) -> str:
        subject = self._subject(kind)

        if not isinstance(outcome, Failure):
            if kind.is_text:
                return f"{subject} copied" if outcome.server_ack else f"{subject} copy failed"
            return f"{subject} uploaded" if outcome.server_ack else f"{subject} upload failed"

        if outcome.kind is ErrorKind.UNREADABLE:
            return f"Could not read {subject.lower()} data"
        if outcome.kind is ErrorKind.CANCELLED:
            return "Upload cancelled"
        if outcome.kind is ErrorKind.ALREADY_IN_PROGRESS:
            return "Upload already in progress"

        if kind.is_text:
            return f"{subject} copy failed: {outcome.message}"
        return f"Error: {outcome.message}"

    @staticmethod
    def _subject(kind: PayloadKind) -> str:
        noun = 'Text' if kind.is_text else 'Image'
        return f"{noun}s" if kind.is_multiple else noun

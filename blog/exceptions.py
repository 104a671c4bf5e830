"""
Error taxonomy for the article/comment write path.

Validators never raise; they return a ``ValidationResult``.  The service
layer turns a failing result into ``ValidationError`` so the router can
report every field problem in a single response.
"""
from blog.validation import FieldFailure


class BlogError(Exception):
    """Base class for all domain errors raised by the service layer."""


class ValidationError(BlogError):
    """One or more field-level failures; fix the input and resubmit."""

    def __init__(self, failures: list[FieldFailure]) -> None:
        self.failures = list(failures)
        fields = ", ".join(sorted({f.field for f in self.failures}))
        super().__init__(f"Validation failed: {fields}")


class ReferentialIntegrityError(BlogError):
    """A comment points at an article that does not exist."""

    def __init__(self, article_id: int | None) -> None:
        self.article_id = article_id
        super().__init__(f"Article {article_id} does not exist")


class CascadeFailure(BlogError):
    """
    Comments survived the deletion of their article.

    Raised inside the deleting transaction so the caller's rollback
    discards the partial delete; never retried.
    """

    def __init__(self, article_id: int, remaining: int) -> None:
        self.article_id = article_id
        self.remaining = remaining
        super().__init__(
            f"Cascade delete of article {article_id} left {remaining} comment(s) behind"
        )

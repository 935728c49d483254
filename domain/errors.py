class CamError(Exception):
    """Base exception for intake and approval errors."""


class MissingFileError(CamError):
    """Raised when a submission carries no file payload."""

    def __init__(self) -> None:
        super().__init__("No file uploaded")


class NotFoundError(CamError):
    """Raised when a document or workflow identifier does not resolve."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"{kind.capitalize()} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class InvalidDecisionError(CamError):
    """Raised when a decision is neither 'approve' nor 'reject'."""

    def __init__(self, value: object):
        super().__init__(f"Invalid decision {value!r}; expected 'approve' or 'reject'")
        self.value = value


class InvalidStateError(CamError):
    """Raised when a decision targets a workflow that is already decided."""

    def __init__(self, workflow_id: str, status: str):
        super().__init__(f"Workflow {workflow_id} is already {status}")
        self.workflow_id = workflow_id
        self.status = status

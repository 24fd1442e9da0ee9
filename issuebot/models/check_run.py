"""CI check run attached to a commit."""

from pydantic import BaseModel

FAILURE_CONCLUSION = "failure"


class CheckRun(BaseModel):
    """Check run result. For GitHub Actions the check run id is the job id."""

    id: int
    name: str
    status: str = "completed"
    conclusion: str | None = None

    @property
    def failed(self) -> bool:
        return self.conclusion == FAILURE_CONCLUSION

"""Pull request model."""

from pydantic import BaseModel


class PR(BaseModel):
    """Pull request; head_sha identifies the commit whose checks are rerun."""

    number: int
    title: str
    head_branch: str
    head_sha: str
    base_branch: str
    state: str
    html_url: str | None = None

from typing import List, Literal, Optional

import pydantic


class Model(pydantic.BaseModel):
    pass


class Repository(Model):
    id: int
    name: str
    full_name: Optional[str] = None
    url: str
    html_url: Optional[str] = None
    private: Optional[bool] = None


class Label(Model):
    name: str
    id: Optional[int] = None
    color: Optional[str] = None


class PrConnection(Model):
    ref: str
    sha: str


class PullRequest(Model):
    id: Optional[int] = None
    number: int
    state: Optional[Literal["open", "closed"]] = None
    head: Optional[PrConnection] = None
    labels: List[Label] = pydantic.Field(default_factory=list)
    html_url: Optional[str] = None


class Review(Model):
    id: Optional[int] = None
    state: str
    commit_id: Optional[str] = None
    html_url: Optional[str] = None


class Comment(Model):
    id: int
    body: str = ""
    html_url: Optional[str] = None

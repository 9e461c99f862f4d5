from dataclasses import dataclass


@dataclass(frozen=True)
class PullRequestRef:
    repo_full_name: str
    number: int

    @property
    def owner(self) -> str:
        return self.repo_full_name.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.repo_full_name.split("/", 1)[1]


@dataclass(frozen=True)
class Label:
    name: str


@dataclass(frozen=True)
class ChangedFile:
    filename: str
    patch: str | None = None


@dataclass(frozen=True)
class PublishResult:
    status_code: int

    @property
    def ok(self) -> bool:
        return self.status_code == 201

"""Registry of the values a user can pick when scaffolding a service.

Each family (framework, AWS target, CI/CD pipeline, add-on) is an ordered
``ChoiceSet`` of ``Choice`` records.  Only ``Choice.value`` is ever stored or
compared; ``Choice.name`` is for display.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

from microsvc.errors import InvalidChoiceError, InvalidServiceNameError

SERVICE_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")


class Choice(BaseModel):
    """A selectable value and its display label."""

    model_config = ConfigDict(frozen=True)

    value: str
    name: str


class ChoiceSet(BaseModel):
    """An ordered, closed set of choices for one option family."""

    model_config = ConfigDict(frozen=True)

    label: str
    choices: tuple[Choice, ...]

    @property
    def default(self) -> str:
        """The fallback value: the first entry of the set."""
        return self.choices[0].value

    def values(self) -> list[str]:
        return [choice.value for choice in self.choices]

    def is_valid(self, value: object) -> bool:
        """Exact match against the machine values."""
        return any(choice.value == value for choice in self.choices)

    def lookup(self, raw: str) -> str:
        """Return the machine value matching *raw*, ignoring case and padding.

        Raises:
            InvalidChoiceError: If nothing in the set matches.
        """
        normalized = str(raw).strip().lower()
        for choice in self.choices:
            if choice.value == normalized:
                return choice.value
        raise InvalidChoiceError(self.label, str(raw), self.values())

    def label_for(self, value: str) -> str:
        for choice in self.choices:
            if choice.value == value:
                return choice.name
        raise InvalidChoiceError(self.label, value, self.values())


FRAMEWORKS = ChoiceSet(
    label="framework",
    choices=(
        Choice(value="express", name="Express"),
        Choice(value="fastify", name="Fastify"),
    ),
)

AWS_TARGETS = ChoiceSet(
    label="AWS target",
    choices=(
        Choice(value="ecs", name="ECS Fargate"),
        Choice(value="lambda", name="AWS Lambda"),
        Choice(value="ec2", name="EC2 with PM2"),
    ),
)

CICD_PIPELINES = ChoiceSet(
    label="CI/CD pipeline",
    choices=(
        Choice(value="github", name="GitHub Actions"),
        Choice(value="gitlab", name="GitLab CI"),
    ),
)

ADDONS = ChoiceSet(
    label="add-on",
    choices=(
        Choice(value="postgres", name="PostgreSQL (includes docker-compose service)"),
        Choice(value="mongo", name="MongoDB (includes docker-compose service)"),
        Choice(value="redis", name="Redis cache"),
        Choice(value="sqs", name="SQS consumer scaffold"),
    ),
)


def validate_service_name(raw: str | None) -> str:
    """Trim *raw* and make sure it is a usable service name.

    Raises:
        InvalidServiceNameError: If the name is empty or not ``[a-z0-9-]+``.
    """
    name = (raw or "").strip()
    if not name or not SERVICE_NAME_PATTERN.match(name):
        raise InvalidServiceNameError(raw or "")
    return name


def parse_addons(raw: str) -> list[str]:
    """Split a comma-separated add-on list into validated, unique values.

    E.g. ``"Redis, postgres,redis"`` -> ``["redis", "postgres"]``.
    """
    addons: list[str] = []
    for item in raw.split(","):
        if not item.strip():
            continue
        value = ADDONS.lookup(item)
        if value not in addons:
            addons.append(value)
    return addons

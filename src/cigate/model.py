from typing import List

import pydantic

from cigate import config


class Model(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="forbid", frozen=True)


class TriggerConfig(Model):
    approved_label: str = pydantic.Field(
        default_factory=lambda: config.APPROVED_LABEL, min_length=1
    )
    bot: str = pydantic.Field(default_factory=lambda: config.CI_BOT, min_length=1)
    fast_target: str = pydantic.Field(
        default_factory=lambda: config.FAST_TEST_TARGET, min_length=1
    )
    full_targets: List[str] = pydantic.Field(
        default_factory=lambda: list(config.FULL_TEST_TARGETS), min_length=1
    )

    @pydantic.field_validator("full_targets")
    @classmethod
    def strip_targets(cls, targets: List[str]) -> List[str]:
        targets = [t.strip() for t in targets if t.strip()]
        if len(targets) == 0:
            raise ValueError("At least one full test target is required")
        return targets

    def command(self, target: str) -> str:
        return f"{self.bot} {target}"

    def fast_trigger(self) -> str:
        return self.command(self.fast_target)

    def full_trigger(self) -> str:
        lines = [
            "Pull Request has been approved :tada:",
            "Launching full test suite...",
        ]
        lines += [self.command(t) for t in self.full_targets]
        return "\n".join(lines)

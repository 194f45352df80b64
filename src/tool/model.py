from dataclasses import dataclass


@dataclass(frozen=True)
class ToolResult:
    status: str  # OK|INVALID_ARGUMENT|INTERNAL_ERROR
    text: str

    @property
    def is_error(self) -> bool:
        return self.status != "OK"

from dataclasses import dataclass, field


@dataclass
class SeedResult:
    success: bool
    count: int = 0
    error: str | None = None
    created: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        if self.success:
            return {"success": True, "count": self.count}
        result = {"success": False, "error": self.error}
        if self.created:
            result["created"] = list(self.created)
        return result


@dataclass
class ClearResult:
    success: bool
    count: int = 0
    error: str | None = None

    def to_dict(self) -> dict:
        if self.success:
            return {"success": True, "count": self.count}
        return {"success": False, "error": self.error}


@dataclass
class RoleResult:
    success: bool
    kind: str
    message: str
    uid: str | None = None

    def to_dict(self) -> dict:
        return {"success": self.success, "kind": self.kind, "message": self.message, "uid": self.uid}

# scaffel/parsers/tech_stack.py
"""Tech stack parsing with per-slot defaults."""

from typing import Any

from pydantic import BaseModel, ConfigDict

FRAMEWORKS = ("nextjs", "react", "vue", "angular", "express", "fastify", "nest")
BACKENDS = ("supabase", "firebase", "custom")
DATABASES = ("postgresql", "mysql", "mongodb", "sqlite")
LANGUAGES = ("typescript", "javascript")
STYLINGS = ("tailwind", "css", "styled-components")

# slot -> (accepted values, default)
_SLOTS: dict[str, tuple[tuple[str, ...], str]] = {
    "framework": (FRAMEWORKS, "nextjs"),
    "backend": (BACKENDS, "supabase"),
    "database": (DATABASES, "postgresql"),
    "language": (LANGUAGES, "typescript"),
    "styling": (STYLINGS, "tailwind"),
}


class TechStack(BaseModel):
    """Normalized tech stack."""

    model_config = ConfigDict(frozen=True)

    framework: str = "nextjs"
    backend: str = "supabase"
    database: str = "postgresql"
    language: str = "typescript"
    styling: str = "tailwind"


class TechStackParser:
    def parse(self, data: dict[str, Any] | None) -> TechStack:
        data = data or {}
        values = {}
        for slot, (accepted, default) in _SLOTS.items():
            raw = (data.get(slot) or "").strip().lower()
            values[slot] = raw if raw in accepted else default
        return TechStack(**values)

    def parse_from_string(self, text: str) -> TechStack:
        """Assign each comma-separated token to the first slot that accepts it."""
        found: dict[str, str] = {}
        for token in (part.strip().lower() for part in text.split(",")):
            for slot, (accepted, _) in _SLOTS.items():
                if token in accepted:
                    found[slot] = token
                    break
        return self.parse(found)

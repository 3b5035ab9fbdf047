"""Prompt template loading and variable substitution."""

import re
from dataclasses import dataclass, field

import yaml

from .templates import BUILTIN_TEMPLATES

FRONT_MATTER_PATTERN = re.compile(r"^---\n(.*?)\n---\n(.*)$", re.DOTALL)
VARIABLE_PATTERN = re.compile(r"\{\{(\w+)\}\}")


class TemplateNotFoundError(KeyError):
    """Raised when a prompt template name is not registered."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Prompt template not found: {name}. Available: {', '.join(available)}"
        )


@dataclass
class PromptTemplate:
    name: str
    description: str
    body: str
    variables: list[str] = field(default_factory=list)


def parse_template(raw: str) -> PromptTemplate:
    """Parse a template string with YAML front-matter.

    A string without front-matter is taken as a bare body.
    """
    match = FRONT_MATTER_PATTERN.match(raw)
    if not match:
        return PromptTemplate(name="unknown", description="", body=raw.strip())

    meta = yaml.safe_load(match.group(1)) or {}
    return PromptTemplate(
        name=str(meta.get("name", "unknown")),
        description=str(meta.get("description", "")),
        body=match.group(2).strip(),
        variables=[str(v) for v in meta.get("variables") or []],
    )


class PromptAssembler:
    """Registry of prompt templates with {{variable}} substitution."""

    def __init__(self) -> None:
        self._templates: dict[str, PromptTemplate] = {}
        for name, raw in BUILTIN_TEMPLATES.items():
            self.register_template(name, raw)

    def register_template(self, name: str, raw: str) -> None:
        """Register or override a template; the registration name wins."""
        template = parse_template(raw)
        template.name = name
        self._templates[name] = template

    def get_template(self, name: str) -> PromptTemplate:
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(name, self.list_templates()) from None

    def assemble(self, template_name: str, variables: dict[str, str]) -> str:
        """Substitute variables into a template body.

        Placeholders without a value render as empty strings.
        """
        template = self.get_template(template_name)
        return VARIABLE_PATTERN.sub(
            lambda m: variables.get(m.group(1), ""), template.body
        )

    def list_templates(self) -> list[str]:
        return list(self._templates)

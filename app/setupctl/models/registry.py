"""Tool registry models.

This module defines the Pydantic models for the declarative tool
catalogue: categories, tools, presence rules, and per-manager overrides.

Two layers exist. The document models mirror the tools.toml layout
(categories list tool names, tools are described in their own tables).
ToolRegistry is the resolved, typed view used at runtime: a map from
category id to ToolCategory holding ordered ToolSpec records.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CategoryNotFoundError(Exception):
    """Raised when an unknown category id is requested."""

    def __init__(self, category_id: str, available: list[str]) -> None:
        self.category_id = category_id
        self.available = available
        super().__init__(f"Unknown category '{category_id}'. Available: {', '.join(available)}")


class Priority(str, Enum):
    """Installation priority of a category."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key: high first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class PresenceMethod(str, Enum):
    """How a tool's presence on the host is decided.

    Attributes:
        COMMAND: A runnable command named after the tool exists.
        ALTERNATE_NAMES: The tool's own command or one of its renamed binaries exists.
        ANY_OF: Any one of several interchangeable binaries exists.
        PACKAGE_QUERY: The manager's installed-package database lists every
            native identifier. Used for tools with no runnable artifact.
    """

    COMMAND = "command"
    ALTERNATE_NAMES = "alternate_names"
    ANY_OF = "any_of"
    PACKAGE_QUERY = "package_query"


class PresenceRule(BaseModel):
    """Rule deciding whether a tool is already present."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    method: Annotated[PresenceMethod, Field(description="Presence check method")] = (
        PresenceMethod.COMMAND
    )
    commands: Annotated[
        list[str],
        Field(default_factory=list, description="Binary names consulted by the rule"),
    ]

    @model_validator(mode="after")
    def validate_commands(self) -> PresenceRule:
        """Require binary names for the rules that consult them."""
        needs_commands = (PresenceMethod.ALTERNATE_NAMES, PresenceMethod.ANY_OF)
        if self.method in needs_commands and not self.commands:
            msg = f"Presence method '{self.method.value}' requires at least one command"
            raise ValueError(msg)
        return self

    def candidate_commands(self, generic_name: str) -> list[str]:
        """Return the binaries whose existence satisfies this rule.

        Args:
            generic_name: Generic name of the tool the rule belongs to.

        Returns:
            Ordered list of binary names; empty for PACKAGE_QUERY.
        """
        if self.method == PresenceMethod.COMMAND:
            return list(self.commands) or [generic_name]
        if self.method == PresenceMethod.ALTERNATE_NAMES:
            return [generic_name, *(c for c in self.commands if c != generic_name)]
        if self.method == PresenceMethod.ANY_OF:
            return list(self.commands)
        return []


class ToolOverride(BaseModel):
    """Per-manager override for a tool.

    Attributes:
        packages: Native identifiers replacing the identity mapping.
        presence: Presence rule replacing the tool's default rule.
        probe: Functional probe replacing the tool's default probe.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    packages: Annotated[
        list[str] | None,
        Field(min_length=1, description="Native package identifiers"),
    ] = None
    presence: Annotated[PresenceRule | None, Field(description="Presence rule")] = None
    probe: Annotated[
        list[str] | None,
        Field(min_length=1, description="Functional probe command"),
    ] = None


class ToolSpec(BaseModel):
    """A tool in the catalogue, bound to exactly one category.

    Attributes:
        name: Generic, manager-agnostic name.
        category: Id of the owning category.
        priority: Priority inherited from the owning category.
        description: Human-readable description.
        presence: Default presence rule.
        probe: Default functional probe (argument list), if any.
        alternatives: Acceptable alternative generic identities, tried in order.
        overrides: Per-manager overrides keyed by manager id.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    category: str
    priority: Priority
    description: str | None = None
    presence: PresenceRule = Field(default_factory=PresenceRule)
    probe: list[str] | None = None
    alternatives: list[str] = Field(default_factory=list)
    overrides: dict[str, ToolOverride] = Field(default_factory=dict)

    def override_for(self, manager_id: str) -> ToolOverride | None:
        """Return the override registered for a manager, if any."""
        return self.overrides.get(manager_id)

    def presence_for(self, manager_id: str) -> PresenceRule:
        """Return the effective presence rule for a manager."""
        override = self.override_for(manager_id)
        if override is not None and override.presence is not None:
            return override.presence
        return self.presence

    def probe_for(self, manager_id: str) -> list[str] | None:
        """Return the effective functional probe for a manager."""
        override = self.override_for(manager_id)
        if override is not None and override.probe is not None:
            return list(override.probe)
        return list(self.probe) if self.probe else None


class ToolCategory(BaseModel):
    """A group of tools installed together.

    Attributes:
        id: Category identifier.
        description: Human-readable description.
        priority: Category priority (high, medium, low).
        batch_size: Maximum candidate count eligible for a combined install.
        tools: Tools in declared order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    description: str
    priority: Priority
    batch_size: Annotated[int, Field(ge=1)]
    tools: list[ToolSpec]

    @property
    def tool_names(self) -> list[str]:
        """Generic names of the tools in declared order."""
        return [tool.name for tool in self.tools]


# =============================================================================
# Document models (tools.toml layout)
# =============================================================================


class CategoryEntry(BaseModel):
    """A [categories.<id>] table."""

    model_config = ConfigDict(extra="forbid")

    description: str
    priority: Priority = Priority.MEDIUM
    batch_size: Annotated[int, Field(ge=1, description="Combined install threshold")] = 1
    tools: Annotated[list[str], Field(min_length=1)]


class ToolEntry(BaseModel):
    """A [tools.<name>] table."""

    model_config = ConfigDict(extra="forbid")

    description: str | None = None
    presence: PresenceRule | None = None
    probe: Annotated[list[str] | None, Field(min_length=1)] = None
    alternatives: list[str] = Field(default_factory=list)
    overrides: dict[str, ToolOverride] = Field(default_factory=dict)


class RegistryDocument(BaseModel):
    """Complete tools.toml document."""

    model_config = ConfigDict(extra="forbid")

    version: str = "1.0"
    description: str | None = None
    categories: Annotated[dict[str, CategoryEntry], Field(min_length=1)]
    tools: dict[str, ToolEntry] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_membership(self) -> RegistryDocument:
        """Every tool belongs to exactly one category."""
        owners: dict[str, str] = {}
        for category_id, entry in self.categories.items():
            for tool in entry.tools:
                if tool in owners:
                    msg = (
                        f"Tool '{tool}' is listed in both '{owners[tool]}' "
                        f"and '{category_id}'"
                    )
                    raise ValueError(msg)
                owners[tool] = category_id

        orphans = sorted(set(self.tools) - set(owners))
        if orphans:
            msg = f"Tools without a category: {', '.join(orphans)}"
            raise ValueError(msg)
        return self


class ToolRegistry(BaseModel):
    """Resolved, read-only tool catalogue."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    version: str = "1.0"
    description: str | None = None
    categories: dict[str, ToolCategory]

    @classmethod
    def from_document(cls, document: RegistryDocument) -> ToolRegistry:
        """Build the runtime registry from a validated document.

        Args:
            document: Parsed tools.toml content.

        Returns:
            ToolRegistry with ToolSpec records bound to their categories.
        """
        categories: dict[str, ToolCategory] = {}
        for category_id, entry in document.categories.items():
            tools: list[ToolSpec] = []
            for name in entry.tools:
                tool_entry = document.tools.get(name) or ToolEntry()
                tools.append(
                    ToolSpec(
                        name=name,
                        category=category_id,
                        priority=entry.priority,
                        description=tool_entry.description,
                        presence=tool_entry.presence or PresenceRule(),
                        probe=tool_entry.probe,
                        alternatives=tool_entry.alternatives,
                        overrides=tool_entry.overrides,
                    )
                )
            categories[category_id] = ToolCategory(
                id=category_id,
                description=entry.description,
                priority=entry.priority,
                batch_size=entry.batch_size,
                tools=tools,
            )
        return cls(
            version=document.version,
            description=document.description,
            categories=categories,
        )

    def to_document(self) -> RegistryDocument:
        """Convert back to the tools.toml document layout."""
        categories: dict[str, CategoryEntry] = {}
        tools: dict[str, ToolEntry] = {}
        for category in self.categories.values():
            categories[category.id] = CategoryEntry(
                description=category.description,
                priority=category.priority,
                batch_size=category.batch_size,
                tools=category.tool_names,
            )
            for tool in category.tools:
                entry = ToolEntry(
                    description=tool.description,
                    presence=tool.presence if tool.presence != PresenceRule() else None,
                    probe=tool.probe,
                    alternatives=tool.alternatives,
                    overrides=tool.overrides,
                )
                if entry != ToolEntry():
                    tools[tool.name] = entry
        return RegistryDocument(
            version=self.version,
            description=self.description,
            categories=categories,
            tools=tools,
        )

    def get_category(self, category_id: str) -> ToolCategory:
        """Look up a category by id.

        Raises:
            CategoryNotFoundError: If the id is unknown.
        """
        try:
            return self.categories[category_id]
        except KeyError:
            raise CategoryNotFoundError(category_id, list(self.categories)) from None

    def ordered_categories(self) -> list[ToolCategory]:
        """Categories sorted high -> medium -> low, declared order within a priority."""
        return sorted(self.categories.values(), key=lambda c: c.priority.rank)

    def find_tool(self, name: str) -> ToolSpec | None:
        """Return the ToolSpec for a generic name, or None if not catalogued."""
        for category in self.categories.values():
            for tool in category.tools:
                if tool.name == name:
                    return tool
        return None

    @property
    def tool_count(self) -> int:
        """Total number of tools across all categories."""
        return sum(len(c.tools) for c in self.categories.values())

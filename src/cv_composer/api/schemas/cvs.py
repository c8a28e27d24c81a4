"""Pydantic schemas for CV documents, layouts and selections."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from cv_composer.constants import DisplayMode, EntityKind, LayoutMode
from cv_composer.core import LayoutConfig, ResolvedDocument, ResolvedItem
from cv_composer.core.layout import PageLayout
from cv_composer.core.records import SelectionOverride


class CVCreateRequest(BaseModel):
    name: str = Field("My CV", min_length=1, description="Document name shown to the owner")
    language: str = Field("en", min_length=2, max_length=8, description="Content language")
    layout_mode: LayoutMode = Field(LayoutMode.SINGLE_COLUMN)
    layout_config: dict[str, Any] | None = Field(
        None, description="Custom page layout; omit to use the default for the mode"
    )


class CVUpdateRequest(BaseModel):
    """Only provided fields are updated."""

    name: str | None = Field(None, min_length=1)
    language: str | None = Field(None, min_length=2, max_length=8)
    layout_mode: LayoutMode | None = None
    is_archived: bool | None = None


class CVResponse(BaseModel):
    id: int
    user_id: int
    name: str
    language: str
    layout_mode: str
    has_custom_layout: bool
    is_archived: bool
    created_at: datetime
    updated_at: datetime


class PageLayoutSchema(BaseModel):
    sidebar: list[str] = Field(default_factory=list)
    main: list[str] = Field(default_factory=list)

    @classmethod
    def from_page(cls, page: PageLayout) -> PageLayoutSchema:
        return cls(**page.to_dict())


class LayoutResponse(BaseModel):
    mode: LayoutMode
    pages: list[PageLayoutSchema]
    is_default: bool = False


class LayoutUpdateRequest(BaseModel):
    layout_config: dict[str, Any] | None = Field(
        ..., description="Layout with 'mode' and 'pages'; null restores the default"
    )


class SelectionRequest(BaseModel):
    """One override row. Every field replaces what was stored before."""

    master_entity_id: int
    is_selected: bool = True
    is_favorite: bool = False
    display_order: int | None = None
    description_override: str | None = None
    selected_indices: list[int] | None = Field(
        None, description="Bullet (work experience) or skill indices to keep; null keeps all"
    )
    display_mode: DisplayMode | None = None

    def to_override(self) -> SelectionOverride:
        return SelectionOverride(
            master_entity_id=self.master_entity_id,
            is_selected=self.is_selected,
            is_favorite=self.is_favorite,
            display_order=self.display_order,
            description_override=self.description_override,
            selected_indices=(
                tuple(self.selected_indices) if self.selected_indices is not None else None
            ),
            display_mode=self.display_mode,
        )


class SelectionsUpdateRequest(BaseModel):
    selections: list[SelectionRequest]


class SelectionResponse(BaseModel):
    master_entity_id: int
    is_selected: bool
    is_favorite: bool
    display_order: int | None = None
    description_override: str | None = None
    selected_indices: list[int] | None = None
    display_mode: DisplayMode | None = None

    @classmethod
    def from_override(cls, override: SelectionOverride) -> SelectionResponse:
        return cls(
            master_entity_id=override.master_entity_id,
            is_selected=override.is_selected,
            is_favorite=override.is_favorite,
            display_order=override.display_order,
            description_override=override.description_override,
            selected_indices=(
                list(override.selected_indices)
                if override.selected_indices is not None
                else None
            ),
            display_mode=override.display_mode,
        )


class ResolvedItemResponse(BaseModel):
    id: int
    kind: EntityKind
    is_selected: bool
    is_favorite: bool
    display_order: int | None = None
    description: str | None = None
    items: list[str] | None = None
    display_mode: DisplayMode | None = None
    has_override: bool = False
    entry: dict[str, Any] = Field(description="Master entity fields, unmodified")

    @classmethod
    def from_item(cls, item: ResolvedItem) -> ResolvedItemResponse:
        return cls(
            id=item.id,
            kind=item.kind,
            is_selected=item.is_selected,
            is_favorite=item.is_favorite,
            display_order=item.display_order,
            description=item.description,
            items=list(item.items) if item.items is not None else None,
            display_mode=item.display_mode,
            has_override=item.has_override,
            entry=asdict(item.entry),
        )


class ResolvedDocumentResponse(BaseModel):
    id: int
    name: str
    language: str
    layout: LayoutResponse
    sections: dict[EntityKind, list[ResolvedItemResponse]]

    @classmethod
    def from_resolved(cls, resolved: ResolvedDocument) -> ResolvedDocumentResponse:
        return cls(
            id=resolved.document.id,
            name=resolved.document.name,
            language=resolved.document.language,
            layout=layout_response(
                resolved.layout, is_default=resolved.document.layout_config is None
            ),
            sections={
                kind: [ResolvedItemResponse.from_item(item) for item in items]
                for kind, items in resolved.sections.items()
            },
        )


def layout_response(config: LayoutConfig, is_default: bool = False) -> LayoutResponse:
    return LayoutResponse(
        mode=config.mode,
        pages=[PageLayoutSchema.from_page(page) for page in config.pages],
        is_default=is_default,
    )

"""Pydantic schemas for the papers list and metadata envelopes."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from paper_catalog.catalog.facets import DIMENSION_ORDER, FacetDimension

# Envelope key per facet dimension
METADATA_KEYS: dict[FacetDimension, str] = {
    FacetDimension.CLASS: "classes",
    FacetDimension.SUBJECT: "subjects",
    FacetDimension.BOARD: "boards",
    FacetDimension.YEAR: "years",
    FacetDimension.EXAM_TYPE: "examTypes",
}


class FacetOption(BaseModel):
    """One selectable facet value and the number of papers matching it."""

    model_config = ConfigDict(frozen=True)

    name: str
    count: int = 0

    @field_validator("name", mode="before")
    @classmethod
    def stringify_name(cls, value: Any) -> Any:
        # Years come back as numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(int(value))
        return value

    @property
    def value(self) -> str:
        return self.name


class PaperItem(BaseModel):
    """Paper as returned by the admin list endpoint. Unknown fields are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = Field(default=None, alias="_id")
    title: str | None = None
    paper_class: str | int | None = Field(default=None, alias="class")
    subject: str | None = None
    board: str | None = None
    year: int | str | None = None
    exam_type: str | None = Field(default=None, alias="examType")
    is_active: bool = Field(default=True, alias="isActive")

    @field_validator("is_active", mode="before")
    @classmethod
    def null_active(cls, value: Any) -> Any:
        # A null flag means active
        return value if value is not None else True


class PaginationMeta(BaseModel):
    total: int = 0

    @field_validator("total", mode="before")
    @classmethod
    def null_total(cls, value: Any) -> Any:
        return value if value is not None else 0


class PaperListData(BaseModel):
    """``data`` member of the list envelope."""

    items: list[PaperItem] = Field(default_factory=list)
    pagination: PaginationMeta = Field(default_factory=PaginationMeta)
    facets: dict[str, list[FacetOption]] = Field(default_factory=dict)

    @field_validator("items", mode="before")
    @classmethod
    def null_items(cls, value: Any) -> Any:
        return value if value is not None else []

    @field_validator("pagination", "facets", mode="before")
    @classmethod
    def null_mapping(cls, value: Any) -> Any:
        return value if value is not None else {}

    def facet_counts(self) -> dict[FacetDimension, list[FacetOption]]:
        """
        Per-dimension counts when the server includes them with the page.

        Accepts either wire dimension names ("class") or metadata keys ("classes").
        """
        counts: dict[FacetDimension, list[FacetOption]] = {}
        for dimension in DIMENSION_ORDER:
            options = self.facets.get(dimension.value)
            if options is None:
                options = self.facets.get(METADATA_KEYS[dimension])
            if options is not None:
                counts[dimension] = list(options)
        return counts


class PaperListEnvelope(BaseModel):
    """``GET papers/admin/list`` response envelope."""

    model_config = ConfigDict(populate_by_name=True)

    is_success: bool = Field(alias="isSuccess")
    message: str | None = None
    data: PaperListData | None = None


class CatalogMetadata(BaseModel):
    """``data`` member of the metadata envelope."""

    model_config = ConfigDict(populate_by_name=True)

    classes: list[FacetOption] = Field(default_factory=list)
    subjects: list[FacetOption] = Field(default_factory=list)
    boards: list[FacetOption] = Field(default_factory=list)
    years: list[FacetOption] = Field(default_factory=list)
    exam_types: list[FacetOption] = Field(default_factory=list, alias="examTypes")

    @field_validator("classes", "subjects", "boards", "years", "exam_types", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return value if value is not None else []

    def options_by_dimension(self) -> dict[FacetDimension, list[FacetOption]]:
        return {
            FacetDimension.CLASS: list(self.classes),
            FacetDimension.SUBJECT: list(self.subjects),
            FacetDimension.BOARD: list(self.boards),
            FacetDimension.YEAR: list(self.years),
            FacetDimension.EXAM_TYPE: list(self.exam_types),
        }


class MetadataEnvelope(BaseModel):
    """``GET papers/metadata`` response envelope."""

    model_config = ConfigDict(populate_by_name=True)

    is_success: bool = Field(alias="isSuccess")
    message: str | None = None
    data: CatalogMetadata | None = None


def empty_options() -> dict[FacetDimension, list[FacetOption]]:
    """No options for any dimension (metadata unavailable)."""
    return {dimension: [] for dimension in DIMENSION_ORDER}

"""Request models for building filter sessions."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from ..config import Settings


class FilterOptions(BaseModel):
    """Validated options for a search engine and its pager."""
    
    case_insensitive: bool = Field(default=True, description="Case insensitive searching")
    fuzzy: bool = Field(default=True, description="Fall back to fuzzy matching")
    page_size: int = Field(default=50, ge=1, description="Rows revealed per load-more")
    initial_page_size: Optional[int] = Field(
        None, ge=1, description="Rows shown after a new search (defaults to page_size)"
    )
    highlight: bool = Field(default=True, description="Compute highlight explanations for rows")

    @model_validator(mode="after")
    def default_initial_page(self) -> "FilterOptions":
        """Fill in the initial page size from the page size."""
        if self.initial_page_size is None:
            self.initial_page_size = self.page_size
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> "FilterOptions":
        """Build options from application settings."""
        return cls(
            case_insensitive=settings.search_case_insensitive,
            fuzzy=settings.search_fuzzy,
            page_size=settings.page_size,
            initial_page_size=settings.initial_page_size,
            highlight=settings.highlight_matches,
        )

"""Output models for match explanations, list rows and status."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HighlightRange(BaseModel):
    """One contiguous run of matched characters."""
    
    model_config = ConfigDict(frozen=True)
    
    start: int = Field(..., ge=0, description="Offset of the first matched character")
    length: int = Field(..., ge=1, description="Number of matched characters")
    
    @property
    def end(self) -> int:
        """Offset just past the last matched character."""
        return self.start + self.length


class Explanation(BaseModel):
    """How one search token matched a line of text."""
    
    model_config = ConfigDict(frozen=True)
    
    token: str = Field(..., description="The search token being explained")
    score: int = Field(..., description="Per-token score (lower is better)")
    start_pos: int = Field(..., ge=0, description="Start of the matched span")
    end_pos: int = Field(..., ge=0, description="End of the matched span (exclusive)")
    fuzzy: bool = Field(default=False, description="Whether the match was a fuzzy match")
    ranges: List[HighlightRange] = Field(..., description="Matched character runs, left to right")


class ListRow(BaseModel):
    """A materialized row of a paged match list."""
    
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
    
    position: int = Field(..., ge=0, description="Position within the ordered match list")
    index: int = Field(..., ge=0, description="Stable candidate index")
    candidate: Any = Field(..., description="The candidate exactly as supplied")
    text: str = Field(..., description="Display text of the row")
    explanations: List[Explanation] = Field(
        default_factory=list, description="Highlight explanations for the row text"
    )


class MatchStatus(BaseModel):
    """Counts for status display."""
    
    matched: int = Field(..., ge=0, description="Number of matching candidates")
    total: int = Field(..., ge=0, description="Total number of candidates")
    shown: int = Field(..., ge=0, description="Number of rows currently materialized")
    search: Optional[str] = Field(None, description="Current search, if any")
    
    @property
    def remaining(self) -> int:
        """Matches not yet materialized."""
        return self.matched - self.shown
    
    def describe(self, title: str = "") -> str:
        """Short status text such as ``Files : 3/10 items matching foo``."""
        prefix = f"{title} : " if title else ""
        text = f"{prefix}{self.matched}/{self.total} items"
        if self.search:
            text += f" matching {self.search}"
        return text

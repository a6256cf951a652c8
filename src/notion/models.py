"""Pydantic models for Notion API data."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from src.notion.enums import TaskStatus


class Task(BaseModel):
    """A task from Notion with parsed properties.

    Represents a page from the tasks database with its properties extracted
    and normalised. Each fetch produces fresh, immutable instances.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Notion page ID")
    name: str = Field(default="", description="Task title")
    icon: str = Field(default="", description="Emoji icon or unsupported-type marker")
    status: TaskStatus = Field(..., description="Task status")
    date: dt.date | None = Field(None, description="Scheduled date, None if unscheduled")
    created_time: dt.datetime = Field(..., description="Page creation time")
    tags: list[str] = Field(default_factory=list, description="Tag names in source order")
    url: str = Field(..., description="Canonical Notion URL for the page")

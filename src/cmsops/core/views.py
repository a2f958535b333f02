"""Table layouts for each backend resource.

A TableView pairs a column schema with the detail route prefix used when a
row is activated, and knows how to turn a raw backend document into a
table record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from cmsops.core.models import CellValue, Column, ImageCell, Record, TextCell
from cmsops.core.resources import document_id

NO_IMAGE_TEXT = "No image available"

DASHBOARD_ROOT = "/dashboard/webdata"
COURSES_ROOT = "/dashboard"

CellBuilder = Callable[[Mapping[str, Any]], CellValue]


def text(field_name: str) -> CellBuilder:
    """Cell builder for a plain text field (None when missing or empty)."""

    def _build(doc: Mapping[str, Any]) -> CellValue:
        value = doc.get(field_name)
        if value is None or value == "":
            return None
        return TextCell(str(value))

    return _build


def scalar(field_name: str) -> CellBuilder:
    """Cell builder passing a raw scalar through untagged."""

    def _build(doc: Mapping[str, Any]) -> CellValue:
        value = doc.get(field_name)
        return value if isinstance(value, (str, int, float)) else None

    return _build


def image(field_name: str) -> CellBuilder:
    """Cell builder for an image URL, falling back to a text note."""

    def _build(doc: Mapping[str, Any]) -> CellValue:
        value = doc.get(field_name)
        if isinstance(value, list):
            value = value[0] if value else None
        if value:
            return ImageCell(str(value))
        return TextCell(NO_IMAGE_TEXT)

    return _build


def full_name(doc: Mapping[str, Any]) -> CellValue:
    """Join firstName/lastName into one text cell."""
    parts = [str(doc.get(k) or "").strip() for k in ("firstName", "lastName")]
    name = " ".join(p for p in parts if p)
    return TextCell(name) if name else None


@dataclass(frozen=True)
class TableView:
    """Column layout, detail route and row mapping for one resource."""

    resource: str
    base_url: str
    columns: tuple[Column, ...]
    builders: Mapping[str, CellBuilder] = field(default_factory=dict)

    def to_record(self, doc: Mapping[str, Any]) -> Record:
        """Map a backend document onto this view's columns."""
        record: dict[str, Any] = {"id": document_id(doc)}
        for column in self.columns:
            build = self.builders.get(column.key, scalar(column.key))
            record[column.key] = build(doc)
        return record

    def to_records(self, docs: list[Mapping[str, Any]]) -> list[Record]:
        return [self.to_record(d) for d in docs]


def _view(
    resource: str,
    route: str,
    columns: list[tuple[str, str, CellBuilder]],
    *,
    root: str = DASHBOARD_ROOT,
) -> TableView:
    return TableView(
        resource=resource,
        base_url=f"{root}/{route}",
        columns=tuple(Column(key=k, label=label) for k, label, _ in columns),
        builders={k: b for k, _, b in columns},
    )


VIEWS: dict[str, TableView] = {
    v.resource: v
    for v in (
        _view(
            "membership",
            "membership/edit",
            [("name", "Name", text("name")), ("image", "Image", image("src"))],
        ),
        _view(
            "partner",
            "industry-and-placement-partner/edit",
            [("name", "Company Name", text("name")), ("image", "Logo", image("src"))],
        ),
        _view(
            "contact",
            "contact",
            [
                ("name", "Name", full_name),
                ("email", "Email", text("email")),
                ("message", "Message", text("message")),
                ("status", "Status", text("status")),
                ("submittedAt", "Submitted", text("submittedAt")),
            ],
        ),
        _view(
            "testimonial",
            "testimonials/edit",
            [
                ("name", "Name", text("name")),
                ("image", "Image", image("image")),
                ("feedback", "Feedback", text("feedback")),
            ],
        ),
        _view(
            "advisor",
            "advisors/edit",
            [
                ("name", "Name", text("name")),
                ("image", "Image", image("image")),
                ("role", "Role", text("role")),
            ],
        ),
        _view(
            "session",
            "session-login-details/edit",
            [
                ("name", "Name", text("name")),
                ("phoneNumber", "Phone Number", scalar("phoneNumber")),
                ("email", "Email", text("email")),
                ("city", "City", text("city")),
                ("course", "Course", text("course")),
            ],
        ),
        _view(
            "life-section",
            "life-at-inframe",
            [
                ("sectionType", "Section", text("sectionType")),
                ("title", "Title", text("title")),
                ("image", "Image", image("images")),
                ("order", "Order", scalar("order")),
            ],
        ),
        _view(
            "club",
            "life-at-inframe/clubs",
            [
                ("name", "Name", text("name")),
                ("category", "Category", text("category")),
                ("image", "Image", image("image")),
                ("description", "Description", text("description")),
            ],
        ),
        _view(
            "sport",
            "life-at-inframe/sports",
            [
                ("name", "Name", text("name")),
                ("category", "Category", text("category")),
                ("image", "Image", image("image")),
                ("description", "Description", text("description")),
            ],
        ),
        _view(
            "service",
            "life-at-inframe/services",
            [
                ("title", "Title", text("title")),
                ("description", "Description", text("description")),
                ("order", "Order", scalar("order")),
            ],
        ),
        _view(
            "gallery",
            "life-at-inframe/gallery",
            [
                ("title", "Title", text("title")),
                ("image", "Image", image("imageUrl")),
                ("category", "Category", text("category")),
            ],
        ),
        _view(
            "campus-event",
            "life-at-inframe/events",
            [
                ("title", "Title", text("title")),
                ("category", "Category", text("category")),
                ("image", "Image", image("image")),
                ("description", "Description", text("description")),
            ],
        ),
        _view(
            "download",
            "download",
            [
                ("title", "Title", text("title")),
                ("category", "Category", text("category")),
                ("fileUrl", "File", text("fileUrl")),
            ],
        ),
        _view(
            "blog",
            "blog/edit",
            [
                ("title", "Title", text("title")),
                ("heroImage", "Image", image("heroImage")),
                ("category", "Category", text("category")),
                ("status", "Status", text("status")),
                ("excerpt", "Excerpt", text("excerpt")),
            ],
        ),
        _view(
            "about-hero-image",
            "about-us/hero-gallery",
            [
                ("image", "Image", image("imageUrl")),
                ("altText", "Alt Text", text("altText")),
                ("order", "Order", scalar("order")),
            ],
        ),
        _view(
            "about-statistic",
            "about-us/statistics",
            [
                ("number", "Number", text("number")),
                ("title", "Title", text("title")),
                ("image", "Image", image("imageUrl")),
                ("description", "Description", text("description")),
                ("order", "Order", scalar("order")),
            ],
        ),
        _view(
            "about-core-value",
            "about-us/core-values",
            [
                ("title", "Title", text("title")),
                ("image", "Image", image("imageUrl")),
                ("description", "Description", text("description")),
                ("order", "Order", scalar("order")),
            ],
        ),
        _view(
            "about-campus-image",
            "about-us/campus-gallery",
            [
                ("image", "Image", image("imageUrl")),
                ("altText", "Alt Text", text("altText")),
                ("order", "Order", scalar("order")),
            ],
        ),
        _view(
            "about-content",
            "about-us/content",
            [
                ("sectionType", "Section", text("sectionType")),
                ("title", "Title", text("title")),
                ("content", "Content", text("content")),
                ("isActive", "Active", text("isActive")),
            ],
        ),
        _view(
            "course",
            "courses/edit",
            [
                ("title", "Title", text("title")),
                ("slug", "Slug", text("slug")),
                ("heroImage", "Image", image("heroImage")),
                ("description", "Description", text("description")),
                ("isActive", "Active", text("isActive")),
            ],
            root=COURSES_ROOT,
        ),
    )
}


def get_view(resource: str) -> TableView:
    """Return the table view for a resource (ValueError if there is none)."""
    try:
        return VIEWS[resource]
    except KeyError:
        raise ValueError(f"No table view for resource '{resource}'.") from None


def resolve_route(route: str) -> tuple[TableView, str] | None:
    """
    Map a detail route back to its view and record id.

    Longest base route wins so nested routes (life-at-inframe/clubs) are not
    captured by their parent.
    """
    candidates = sorted(VIEWS.values(), key=lambda v: len(v.base_url), reverse=True)
    for view in candidates:
        prefix = view.base_url + "/"
        if route.startswith(prefix):
            doc_id = route[len(prefix) :]
            if doc_id and "/" not in doc_id:
                return view, doc_id
    return None

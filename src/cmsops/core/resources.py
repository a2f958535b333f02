"""Backend content resources and their CRUD operations.

Each content type on the website (memberships, partners, contacts, ...) is
described by a ResourceEndpoints entry. ResourceAdapter turns those into
CRUD calls over the ApiClient; contact and blog helpers add the extra
status operations those screens need.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Protocol

from cmsops.core.errors import ApiError, ErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceEndpoints:
    """
    Endpoint layout of one backend resource.

    Attributes:
        name: CLI-facing resource name.
        title: Human-readable title for headers.
        list_path: Path returning all documents.
        add_path: Path for creating a document (None if read-only).
        update_path: Path prefix for updates (id is appended), if supported.
        delete_path: Path prefix for deletes (id is appended), if supported.
        get_path: Optional path prefix for fetching one document by id.
        image_field: Document field holding the uploaded asset URL, if any.
    """

    name: str
    title: str
    list_path: str
    add_path: str | None
    update_path: str | None
    delete_path: str | None
    get_path: str | None = None
    image_field: str | None = None


def _crud(
    name: str,
    title: str,
    base: str,
    *,
    plural: str,
    get: bool,
    image_field: str | None = "image",
) -> ResourceEndpoints:
    """Build the common `<base>/get<plural>, add<base>, ...` endpoint layout."""
    return ResourceEndpoints(
        name=name,
        title=title,
        list_path=f"{base}/get{plural}",
        add_path=f"{base}/add{base}",
        update_path=f"{base}/update{base}",
        delete_path=f"{base}/delete{base}",
        get_path=f"{base}/get{base}byid" if get else None,
        image_field=image_field,
    )


ABOUT_US = "about-us"


def _about(name: str, title: str, section: str, singular: str) -> ResourceEndpoints:
    """Build an About Us sub-collection (`about-us/<section>/get<singular>s`, ...)."""
    prefix = f"{ABOUT_US}/{section}"
    return ResourceEndpoints(
        name=name,
        title=title,
        list_path=f"{prefix}/get{singular}s",
        add_path=f"{prefix}/add{singular}",
        update_path=f"{prefix}/update{singular}",
        delete_path=f"{prefix}/delete{singular}",
        image_field="imageUrl",
    )


RESOURCES: dict[str, ResourceEndpoints] = {
    r.name: r
    for r in (
        ResourceEndpoints(
            name="membership",
            title="Memberships",
            list_path="membership/getMembership",
            add_path="membership/addMembership",
            update_path="membership/updateMembership",
            delete_path="membership/deleteMembership",
            get_path="membership/getMembershipById",
            image_field="src",
        ),
        ResourceEndpoints(
            name="partner",
            title="Industry and placement partners",
            list_path="logo/getlogo",
            add_path="logo/addlogo",
            update_path="logo/updatelogo",
            delete_path="logo/deletelogo",
            get_path="logo/getlogoById",
            image_field="src",
        ),
        ResourceEndpoints(
            name="contact",
            title="Contact submissions",
            list_path="contact/getcontacts",
            add_path="contact/addcontact",
            update_path="contact/updatecontact",
            delete_path="contact/deletecontact",
            get_path="contact/getcontactbyid",
        ),
        ResourceEndpoints(
            name="testimonial",
            title="Testimonials",
            list_path="testimonials/gettestimonials",
            add_path="testimonials/addtestimonials",
            update_path="testimonials/updatetestimonials",
            delete_path="testimonials/deletetestimonials",
            get_path="testimonials/gettestimonialsbyid",
            image_field="image",
        ),
        ResourceEndpoints(
            name="advisor",
            title="Advisors",
            list_path="advisor/getadvisors",
            add_path="advisor/addadvisor",
            update_path="advisor/updateadvisor",
            delete_path="advisor/deleteadvisor",
            get_path="advisor/getadvisorsbyid",
            image_field="image",
        ),
        ResourceEndpoints(
            name="session",
            title="Session logins",
            list_path="session/getsessionlogins",
            add_path="session/addsessionlogin",
            update_path="session/updatesessionlogin",
            delete_path="session/deletesessionlogin",
            get_path="session/getsessionloginbyid",
        ),
        _crud(
            "life-section",
            "Life at Inframe sections",
            "lifeatinframesection",
            plural="lifeatinframesections",
            get=True,
            image_field=None,
        ),
        _crud("club", "Student clubs", "studentclub", plural="studentclubs", get=False),
        _crud(
            "sport", "Sports facilities", "sportsfacility", plural="sportsfacilities", get=False
        ),
        _crud(
            "service",
            "Student services",
            "studentservice",
            plural="studentservices",
            get=False,
            image_field=None,
        ),
        _crud(
            "gallery",
            "Gallery images",
            "galleryimage",
            plural="galleryimages",
            get=False,
            image_field="imageUrl",
        ),
        _crud("campus-event", "Campus events", "campusevent", plural="campusevents", get=False),
        ResourceEndpoints(
            name="download",
            title="Downloads",
            list_path="download/getdownloads",
            add_path="download/adddownload",
            update_path="download/updatedownload",
            delete_path="download/deletedownload",
            get_path="download/getdownloadbyid",
            image_field="fileUrl",
        ),
        ResourceEndpoints(
            name="blog",
            title="Blog posts",
            list_path="blog/getallblogs",
            add_path="blog/addblog",
            update_path="blog/updateblog",
            delete_path="blog/deleteblog",
            get_path="blog/getblogbyid",
            image_field="heroImage",
        ),
        _about("about-hero-image", "About Us hero images", "hero-images", "heroimage"),
        _about("about-statistic", "About Us statistics", "statistics", "statistic"),
        _about("about-core-value", "About Us core values", "core-values", "corevalue"),
        _about("about-campus-image", "About Us campus images", "campus-images", "campusimage"),
        ResourceEndpoints(
            name="about-content",
            title="About Us content sections",
            list_path=f"{ABOUT_US}/content/getcontentsections",
            add_path=f"{ABOUT_US}/content/addorupdatecontent",
            update_path=None,
            delete_path=None,
            image_field="imageUrl",
        ),
        ResourceEndpoints(
            name="course",
            title="Courses",
            list_path="courses",
            add_path="courses",
            update_path="courses",
            delete_path="courses",
            get_path="courses",
            image_field="heroImage",
        ),
    )
}


def get_resource(name: str) -> ResourceEndpoints:
    """Look up a resource by name (raises ValueError for unknown names)."""
    try:
        return RESOURCES[name]
    except KeyError:
        known = ", ".join(sorted(RESOURCES))
        raise ValueError(f"Unknown resource '{name}'. Known resources: {known}") from None


def document_id(doc: Mapping[str, Any]) -> str | None:
    """Return a backend document id (`_id` preferred, then `id`)."""
    raw = doc.get("_id") or doc.get("id")
    return str(raw) if raw is not None else None


class JsonClient(Protocol):
    """Interface of the backend client used by the adapters."""

    def get(self, path: str) -> Any: ...

    def post(self, path: str, payload: Any) -> Any: ...

    def put(self, path: str, payload: Any) -> Any: ...

    def delete(self, path: str) -> Any: ...


def payload_or_none(data: Any) -> Any:
    """
    Return None for a successful envelope that carries no data.

    `unwrap` hands such envelopes back unchanged; to the adapters they mean
    "nothing there", not a document.
    """
    if isinstance(data, Mapping) and "success" in data and data.get("data") is None:
        return None
    return data


class ResourceAdapter:
    """CRUD operations for one backend resource."""

    def __init__(self, client: JsonClient, endpoints: ResourceEndpoints) -> None:
        self.client = client
        self.endpoints = endpoints

    def _path(self, path: str | None, operation: str) -> str:
        if path is None:
            raise ValueError(
                f"Resource '{self.endpoints.name}' does not support {operation}."
            )
        return path

    def list_all(self) -> list[dict[str, Any]]:
        """Return every document of the resource."""
        data = payload_or_none(self.client.get(self.endpoints.list_path))
        if data is None:
            return []
        if not isinstance(data, list):
            raise ApiError(
                f"Unexpected list payload for {self.endpoints.name}.",
                kind=ErrorKind.UNEXPECTED,
            )
        return [dict(d) for d in data if isinstance(d, Mapping)]

    def get(self, doc_id: str) -> dict[str, Any]:
        """
        Return a single document by id.

        Resources without a get-by-id endpoint are resolved from the full
        list; a missing id raises a NOT_FOUND ApiError in both cases.
        """
        if self.endpoints.get_path:
            data = payload_or_none(self.client.get(f"{self.endpoints.get_path}/{doc_id}"))
            if isinstance(data, Mapping):
                return dict(data)
        else:
            for doc in self.list_all():
                if document_id(doc) == doc_id:
                    return doc
        raise ApiError("Resource not found.", kind=ErrorKind.NOT_FOUND, status=404)

    def create(self, payload: Mapping[str, Any]) -> Any:
        """Create a document (ValueError if the resource is read-only)."""
        return self.client.post(self._path(self.endpoints.add_path, "create"), dict(payload))

    def update(self, doc_id: str, payload: Mapping[str, Any]) -> Any:
        """Update a document by id."""
        path = self._path(self.endpoints.update_path, "update")
        return self.client.put(f"{path}/{doc_id}", dict(payload))

    def delete(self, doc_id: str) -> Any:
        """Delete a document by id."""
        path = self._path(self.endpoints.delete_path, "delete")
        return self.client.delete(f"{path}/{doc_id}")


class ContentSection(str, Enum):
    """Kinds of About Us content sections (one document per kind)."""

    WHO_WE_ARE = "who-we-are"
    ABOUT_US = "about-us"
    VISION = "vision"
    MISSION = "mission"
    CORE_VALUES_TEXT = "core-values-text"


def get_content_section(client: JsonClient, section: ContentSection) -> dict[str, Any] | None:
    """Return the About Us content of one section type, or None if it is not set yet."""
    try:
        data = client.get(f"{ABOUT_US}/content/getcontentbytype/{section.value}")
    except ApiError as exc:
        if exc.kind == ErrorKind.NOT_FOUND:
            return None
        raise
    data = payload_or_none(data)
    return dict(data) if isinstance(data, Mapping) else None


DEFAULT_DOWNLOAD_CATEGORIES = (
    "Entrance Exam Schedule",
    "Previous Year Sample Papers",
    "Newsletters",
    "Brochure/Prospectus",
    "Placement Partner Documents",
    "Club Documents",
    "Scholarship and Discount",
)


def default_download_categories() -> list[dict[str, Any]]:
    return [
        {
            "id": f"default-{i}",
            "name": name,
            "description": f"Default category: {name}",
            "isActive": True,
        }
        for i, name in enumerate(DEFAULT_DOWNLOAD_CATEGORIES)
    ]


def list_download_categories(client: JsonClient) -> list[dict[str, Any]]:
    """
    Return the download categories.

    Backends without the categories endpoint answer 404; the built-in
    category list is used then. Other failures propagate.
    """
    try:
        data = payload_or_none(client.get("download/getcategories"))
    except ApiError as exc:
        if exc.kind == ErrorKind.NOT_FOUND:
            logger.info("No categories endpoint, using the default download categories")
            return default_download_categories()
        raise
    return [dict(d) for d in data or [] if isinstance(d, Mapping)]


def delete_download_category(client: JsonClient, category_id: str) -> Any:
    """Delete a download category by id."""
    return client.delete(f"download/deletecategory/{category_id}")


class ContactStatus(str, Enum):
    """Processing state of a contact submission."""

    NEW = "new"
    READ = "read"
    REPLIED = "replied"


def mark_contact_read(adapter: ResourceAdapter, doc_id: str) -> Any:
    """Mark a contact submission as read."""
    return adapter.update(doc_id, {"status": ContactStatus.READ.value})


def mark_contact_replied(adapter: ResourceAdapter, doc_id: str) -> Any:
    """Mark a contact submission as replied."""
    return adapter.update(doc_id, {"status": ContactStatus.REPLIED.value})


class BlogStatus(str, Enum):
    """Publication state of a blog post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


_BLOG_STATUS_PATHS = {
    BlogStatus.PUBLISHED: "blog/publishblog",
    BlogStatus.DRAFT: "blog/saveblogasdraft",
    BlogStatus.ARCHIVED: "blog/archiveblog",
}


def blog_status_body(status: BlogStatus, *, now: datetime | None = None) -> dict[str, Any]:
    """Return the request body used to move a blog post into `status`."""
    if status == BlogStatus.PUBLISHED:
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        return {
            "isPublished": True,
            "isDraft": False,
            "status": status.value,
            "publishedAt": stamp,
        }
    return {
        "isPublished": False,
        "isDraft": status == BlogStatus.DRAFT,
        "status": status.value,
    }


def set_blog_status(client: JsonClient, doc_id: str, status: BlogStatus) -> Any:
    """Publish, draft or archive a blog post through its dedicated endpoint."""
    return client.put(f"{_BLOG_STATUS_PATHS[status]}/{doc_id}", blog_status_body(status))


def normalize_blog(doc: Mapping[str, Any]) -> dict[str, Any]:
    """
    Fill in a blog post's `status` and `id`.

    Older posts only carry the isDraft/isPublished flags; their status is
    derived from those, defaulting to draft.
    """
    out = dict(doc)
    if not out.get("status"):
        if out.get("isDraft"):
            out["status"] = BlogStatus.DRAFT.value
        elif out.get("isPublished"):
            out["status"] = BlogStatus.PUBLISHED.value
        else:
            out["status"] = BlogStatus.DRAFT.value
    out["id"] = document_id(doc)
    return out


def list_blogs(client: JsonClient, status: BlogStatus | None = None) -> list[dict[str, Any]]:
    """Return blog posts, optionally only those in a given status."""
    path = f"blog/getblogsbystatus/{status.value}" if status else "blog/getallblogs"
    data = payload_or_none(client.get(path)) or []
    if not isinstance(data, list):
        raise ApiError("Unexpected list payload for blog.", kind=ErrorKind.UNEXPECTED)
    return [normalize_blog(d) for d in data if isinstance(d, Mapping)]

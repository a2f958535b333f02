import pytest
from typer.testing import CliRunner

import cmsops.cli.cli as cli_module
import cmsops.cli.commands.blog as blog_commands
import cmsops.cli.commands.contact as contact_commands
import cmsops.cli.commands.download as download_commands
import cmsops.cli.commands.records as records_commands
import cmsops.core.uploads as uploads_module
from cmsops.cli.cli import app
from cmsops.cli.common.context import AppContext
from cmsops.core.config import Settings
from cmsops.core.errors import ApiError, ErrorKind
from cmsops.core.uploads import MB

runner = CliRunner()


class _ClientStub:
    def __init__(self, responses: dict[str, object] | None = None, fail: ApiError | None = None):
        self.responses = responses or {}
        self.fail = fail
        self.calls: list[tuple[str, str, object]] = []
        self.closed = False
        self.settings: Settings | None = None

    def close(self):
        self.closed = True

    def _maybe_fail(self):
        if self.fail is not None:
            raise self.fail

    def get(self, path: str):
        self.calls.append(("GET", path, None))
        self._maybe_fail()
        return self.responses.get(path)

    def post(self, path: str, payload):
        self.calls.append(("POST", path, payload))
        self._maybe_fail()
        return {"_id": "new", **payload}

    def put(self, path: str, payload):
        self.calls.append(("PUT", path, payload))
        self._maybe_fail()
        return payload

    def delete(self, path: str):
        self.calls.append(("DELETE", path, None))
        self._maybe_fail()
        return None


@pytest.fixture
def stub(monkeypatch):
    client = _ClientStub(
        {
            "logo/getlogo": [
                {"_id": "1", "name": "Acme", "src": "https://img/a.png"},
                {"_id": "2", "name": "Globex"},
            ],
            "membership/getMembershipById/42": {"_id": "42", "name": "ACM"},
            "blog/getblogsbystatus/draft": [
                {"_id": "b1", "title": "Open house", "isDraft": True},
            ],
            "blog/getallblogs": [
                {"_id": "b1", "title": "Open house", "isDraft": True},
                {"_id": "b2", "title": "Convocation", "isPublished": True},
            ],
        }
    )

    def _build(settings=None):
        client.settings = settings
        return AppContext(settings=settings or Settings(), client=client)

    monkeypatch.setattr(cli_module, "configure_logging", lambda level: None)
    monkeypatch.setattr(records_commands, "build_context", _build)
    monkeypatch.setattr(contact_commands, "build_context", _build)
    monkeypatch.setattr(blog_commands, "build_context", _build)
    monkeypatch.setattr(download_commands, "build_context", _build)
    return client


def test_records_list_filters_rows(stub):
    result = runner.invoke(app, ["records", "list", "partner", "--search", "acme"])

    assert result.exit_code == 0, result.output
    assert "Acme" in result.output
    assert "Globex" not in result.output


def test_records_list_warns_when_nothing_matches(stub):
    result = runner.invoke(app, ["records", "list", "partner", "--search", "zzz"])

    assert result.exit_code == 0
    assert "No records found" in result.output


def test_records_list_unknown_resource_is_input_error(stub):
    result = runner.invoke(app, ["records", "list", "nope"])

    assert result.exit_code == 2
    assert "Unknown resource" in result.output


def test_records_add_sends_payload(stub):
    result = runner.invoke(
        app, ["records", "add", "membership", "--field", "name=IEEE"]
    )

    assert result.exit_code == 0, result.output
    assert ("POST", "membership/addMembership", {"name": "IEEE"}) in stub.calls


def test_records_delete_without_confirmation(stub):
    result = runner.invoke(app, ["records", "delete", "partner", "2", "--no-confirm"])

    assert result.exit_code == 0, result.output
    assert ("DELETE", "logo/deletelogo/2", None) in stub.calls


def test_backend_validation_error_exits_with_details(stub):
    stub.fail = ApiError(
        "Path `email` is required.",
        kind=ErrorKind.VALIDATION,
        status=422,
        details=["Path `email` is required."],
        error_type="VALIDATION",
    )

    result = runner.invoke(app, ["contact", "mark-read", "5"])

    assert result.exit_code == 1
    assert "Validation Error" in result.output
    assert "Path `email` is required." in result.output


def test_navigator_opens_detail_route(stub, capsys):
    appctx = AppContext(settings=Settings(), client=stub)
    navigate = records_commands.make_navigator(appctx)

    navigate("/dashboard/webdata/membership/edit/42")

    assert ("GET", "membership/getMembershipById/42", None) in stub.calls
    assert "ACM" in capsys.readouterr().out


def test_records_show_prints_document_and_closes_client(stub):
    result = runner.invoke(app, ["records", "show", "membership", "42"])

    assert result.exit_code == 0, result.output
    assert "ACM" in result.output
    assert stub.closed is True


def test_records_show_missing_document_is_not_found(stub):
    result = runner.invoke(app, ["records", "show", "membership", "404"])

    assert result.exit_code == 1
    assert "Resource not found." in result.output


def test_records_update_uploads_image_into_image_field(stub, monkeypatch, tmp_path):
    logo = tmp_path / "logo.png"
    logo.write_bytes(b"\x89PNG")
    uploaded: list[str] = []

    def _upload(upload, settings):
        uploaded.append(upload.name)
        return "https://res.cloudinary.com/demo/logo.png"

    monkeypatch.setattr(records_commands, "upload_asset", _upload)

    result = runner.invoke(
        app,
        ["records", "update", "partner", "1", "--field", "name=Acme", "--image", str(logo)],
    )

    assert result.exit_code == 0, result.output
    assert uploaded == ["logo.png"]
    assert (
        "PUT",
        "logo/updatelogo/1",
        {"name": "Acme", "src": "https://res.cloudinary.com/demo/logo.png"},
    ) in stub.calls


def test_records_update_on_upsert_only_resource_is_input_error(stub):
    result = runner.invoke(
        app, ["records", "update", "about-content", "1", "--field", "title=Vision"]
    )

    assert result.exit_code == 2
    assert "does not support update" in result.output
    assert not [c for c in stub.calls if c[0] == "PUT"]


def test_blog_list_by_status(stub):
    result = runner.invoke(app, ["blog", "list", "--status", "draft"])

    assert result.exit_code == 0, result.output
    assert "b1" in result.output
    assert ("GET", "blog/getblogsbystatus/draft", None) in stub.calls


def test_blog_list_all_posts(stub):
    result = runner.invoke(app, ["blog", "list"])

    assert result.exit_code == 0, result.output
    assert "b1" in result.output
    assert "b2" in result.output
    assert ("GET", "blog/getallblogs", None) in stub.calls


def test_blog_status_publishes_post(stub):
    result = runner.invoke(app, ["blog", "status", "b1", "published"])

    assert result.exit_code == 0, result.output
    method, path, body = stub.calls[-1]
    assert (method, path) == ("PUT", "blog/publishblog/b1")
    assert body["isPublished"] is True
    assert "published" in result.output


def test_upload_rejects_oversized_image_without_network(stub, monkeypatch, tmp_path):
    big = tmp_path / "big.png"
    big.write_bytes(b"x" * (6 * MB))

    def _no_network(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(uploads_module.httpx, "Client", _no_network)

    result = runner.invoke(app, ["upload", str(big)])

    assert result.exit_code == 2
    assert "File size must be less than 5MB" in result.output


def test_upload_without_configuration_reports_error(stub, monkeypatch, tmp_path):
    for name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_UPLOAD_PRESET", "CLOUDINARY_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    small = tmp_path / "small.png"
    small.write_bytes(b"\x89PNG")

    result = runner.invoke(app, ["upload", str(small)])

    assert result.exit_code == 1
    assert "Missing Cloudinary configuration" in result.output


def test_download_categories_lists_names(stub):
    stub.responses["download/getcategories"] = [{"_id": "c1", "name": "Newsletters"}]

    result = runner.invoke(app, ["download", "categories"])

    assert result.exit_code == 0, result.output
    assert "Newsletters" in result.output


def test_download_delete_category(stub):
    result = runner.invoke(app, ["download", "delete-category", "c1", "--no-confirm"])

    assert result.exit_code == 0, result.output
    assert ("DELETE", "download/deletecategory/c1", None) in stub.calls


def test_command_groups_reuse_root_settings(stub, monkeypatch):
    monkeypatch.setenv("CMSOPS_API_BASE_URL", "https://cms.example.org/api/v1/")

    result = runner.invoke(app, ["contact", "mark-replied", "5"])

    assert result.exit_code == 0, result.output
    assert stub.settings is not None
    assert stub.settings.api_base_url == "https://cms.example.org/api/v1"


def test_unreadable_image_is_input_error(stub, monkeypatch, tmp_path):
    logo = tmp_path / "logo.png"
    logo.write_bytes(b"\x89PNG")

    class _Unreadable:
        @staticmethod
        def from_path(path):
            raise PermissionError(f"Permission denied: '{path}'")

    monkeypatch.setattr(records_commands, "UploadFile", _Unreadable)

    result = runner.invoke(
        app, ["records", "update", "partner", "1", "--image", str(logo)]
    )

    assert result.exit_code == 2
    assert "Could not read" in result.output
    assert not [c for c in stub.calls if c[0] == "PUT"]

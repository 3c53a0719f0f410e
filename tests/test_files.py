import pytest

from conftest import WEB_URL, DummyResponse
from sharepoint_rest import CheckinType, File, FileInfo, MoveOperations, TemplateFileType

DOCS = f"{WEB_URL}/getFolderByServerRelativeUrl('/sites/dev/Docs')"
REPORT = f"{WEB_URL}/getFileByServerRelativeUrl('/sites/dev/Docs/report.txt')"


@pytest.fixture
def report(sp) -> File:
    return sp.file("/sites/dev/Docs/report.txt")


def test_get_by_name(sp) -> None:
    files = sp.folder("/sites/dev/Docs").files
    assert files.to_url() == f"{DOCS}/files"
    assert files.get_by_name("report.txt").to_url() == f"{DOCS}/files('report.txt')"


def test_add_file_uploads_content(sp, http) -> None:
    http.queue(DummyResponse(200, {"d": {"Name": "report.txt", "ServerRelativeUrl": "/sites/dev/Docs/report.txt"}}))

    result = sp.folder("/sites/dev/Docs").files.add("report.txt", b"hello")

    call = http.calls[-1]
    assert call.method == "POST"
    assert call.url == f"{DOCS}/files/add(overwrite=true,url='report.txt')"
    assert call.data == b"hello"
    assert result.data["Name"] == "report.txt"
    assert result.file.to_url() == f"{DOCS}/files('report.txt')"


def test_add_file_without_overwrite(sp, http) -> None:
    sp.folder("/sites/dev/Docs").files.add("report.txt", "text", should_overwrite=False)
    assert http.calls[-1].url == f"{DOCS}/files/add(overwrite=false,url='report.txt')"


def test_add_template_file(sp, http) -> None:
    sp.folder("/sites/dev/Pages").files.add_template_file("/sites/dev/Pages/home.aspx", TemplateFileType.WIKI_PAGE)
    assert http.calls[-1].url.endswith(
        "/files/addTemplateFile(urloffile='/sites/dev/Pages/home.aspx',templatefiletype=1)"
    )


def test_file_navigation(report) -> None:
    assert report.author.to_url() == f"{REPORT}/Author"
    assert report.checked_out_by_user.to_url() == f"{REPORT}/CheckedOutByUser"
    assert report.list_item_all_fields.to_url() == f"{REPORT}/ListItemAllFields"
    assert report.versions.to_url() == f"{REPORT}/versions"
    assert report.length.to_url() == f"{REPORT}/Length"


def test_check_in_quotes_comment(report, http) -> None:
    report.check_in("it's done", CheckinType.MINOR)
    assert http.calls[-1].url == f"{REPORT}/checkin(comment='it''s done',checkintype=0)"


def test_check_in_rejects_long_comment(report, http) -> None:
    with pytest.raises(ValueError):
        report.check_in("x" * 1024)
    assert http.requests == []


@pytest.mark.parametrize(
    ("action", "suffix"),
    [
        (lambda f: f.check_out(), "checkout"),
        (lambda f: f.undo_check_out(), "undoCheckout"),
        (lambda f: f.approve("ok"), "approve(comment='ok')"),
        (lambda f: f.deny("no"), "deny(comment='no')"),
        (lambda f: f.publish(), "publish(comment='')"),
        (lambda f: f.unpublish("old"), "unpublish(comment='old')"),
        (lambda f: f.copy_to("/sites/dev/Archive/report.txt"), "copyTo(strnewurl='/sites/dev/Archive/report.txt',boverwrite=true)"),
        (lambda f: f.copy_to("/sites/dev/a.txt", False), "copyTo(strnewurl='/sites/dev/a.txt',boverwrite=false)"),
        (lambda f: f.move_to("/sites/dev/b.txt"), "moveTo(newurl='/sites/dev/b.txt',flags=1)"),
        (
            lambda f: f.move_to("/sites/dev/b.txt", MoveOperations.OVERWRITE | MoveOperations.ALLOW_BROKEN_THICKETS),
            "moveTo(newurl='/sites/dev/b.txt',flags=9)",
        ),
    ],
)
def test_file_actions_post_to_method_urls(report, http, action, suffix) -> None:
    action(report)
    call = http.calls[-1]
    assert call.method == "POST"
    assert call.url == f"{REPORT}/{suffix}"


def test_delete_and_recycle(report, http) -> None:
    report.delete()
    assert http.calls[-1].headers["X-HTTP-Method"] == "DELETE"

    http.queue(DummyResponse(200, {"d": {"Recycle": "r-1"}}))
    assert report.recycle() == "r-1"
    assert http.calls[-1].url == f"{REPORT}/recycle"


def test_get_text_bytes_and_json(report, http) -> None:
    http.queue(
        DummyResponse(200, content=b"hello world"),
        DummyResponse(200, content=b"\x89PNG"),
        DummyResponse(200, content=b'{"a": 1}'),
    )
    assert report.get_text() == "hello world"
    assert report.get_bytes() == b"\x89PNG"
    assert report.get_json() == {"a": 1}
    assert {call.url for call in http.calls} == {f"{REPORT}/$value"}
    assert all(call.method == "GET" for call in http.calls)


def test_set_content(report, http) -> None:
    assert report.set_content(b"new") is report
    call = http.calls[-1]
    assert call.url == f"{REPORT}/$value"
    assert call.headers["X-HTTP-Method"] == "PUT"
    assert call.data == b"new"


def test_get_info(report, http) -> None:
    http.queue(
        DummyResponse(
            200,
            {"d": {"Name": "report.txt", "ServerRelativeUrl": "/sites/dev/Docs/report.txt", "Length": "11", "MajorVersion": 3}},
        )
    )
    info = report.get_info()
    assert isinstance(info, FileInfo)
    assert info.length == 11
    assert info.version_label == "3.0"


def test_versions(report, http) -> None:
    versions = report.versions
    assert versions.get_by_id(512).to_url() == f"{REPORT}/versions(512)"

    versions.delete_all()
    versions.delete_by_id(3)
    versions.delete_by_label("1.0")
    versions.restore_by_label("2.0")
    versions.get_by_id(512).delete()

    assert [call.url for call in http.calls] == [
        f"{REPORT}/versions/deleteAll",
        f"{REPORT}/versions/deleteById(vid=3)",
        f"{REPORT}/versions/deleteByLabel(versionlabel='1.0')",
        f"{REPORT}/versions/restoreByLabel(versionlabel='2.0')",
        f"{REPORT}/versions(512)",
    ]
    assert http.calls[-1].headers["X-HTTP-Method"] == "DELETE"


def test_long_comment_limit_applies_to_check_in_only(report, http) -> None:
    comment = "x" * 1024
    report.approve(comment)
    assert http.calls[-1].url == f"{REPORT}/approve(comment='{comment}')"

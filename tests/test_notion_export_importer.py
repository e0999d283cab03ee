import json
import logging
import pytest
from pathlib import Path
from unittest.mock import patch

from notion_import.importers import DirectoryKind, FileKind, NotionExportImporter, classify_directory, classify_file
from notion_import.importers.notion_export import describe_file, format_size
from notion_import.models import FolderRecord, ImportResult

WORKSPACE = "Workspace 11111111111111111111111111111111"
PROJECTS = "Projects abcdef0123456789abcdef0123456789"
ALPHA = "Alpha 22222222222222222222222222222222"
NOTES = "Notes 33333333333333333333333333333333"
ROOT_PAGE = "Root page 44444444444444444444444444444444"


def notes_by_title(result):
    return {note.title: note for note in result.notes}


def block_texts(note):
    return [block["content"][0]["text"] for block in json.loads(note.content)]


@pytest.fixture
def notion_export(tmp_path):
    """
    Export with a single top-level workspace:

        index.html
        Root page <id>.md
        Workspace <id>/
            Notes <id>.md
            Projects <id>/
                Alpha <id>/diagram.png      (attachment bundle)
                Alpha <id>.md
            Projects <id>.md                (folder overview)
            report.pdf
    """
    root = tmp_path / "export"
    workspace = root / WORKSPACE
    projects = workspace / PROJECTS
    (projects / ALPHA).mkdir(parents=True)

    (root / "index.html").write_text("<html></html>")
    (root / f"{ROOT_PAGE}.md").write_text("# Root page\n\nTop level")
    (workspace / f"{NOTES}.md").write_text("# Notes\nplain body\n", encoding="utf-8")
    (projects / ALPHA / "diagram.png").write_bytes(b"\x89PNG")
    (projects / f"{ALPHA}.md").write_text("# Alpha\n\nSome **text**\n\n![Diagram](Alpha/diagram.png)")
    (workspace / f"{PROJECTS}.md").write_text("# Projects\n\nOverview body")
    (workspace / "report.pdf").write_bytes(b"%PDF" + b"0" * 2044)
    return root


def test_single_workspace_is_unwrapped(notion_export):
    result = NotionExportImporter(str(notion_export)).import_export()

    assert [folder.name for folder in result.folders] == ["Projects"]
    projects = result.folders[0]
    assert projects.parent_id is None
    assert projects.order == 0


def test_notes_are_filed_and_ordered(notion_export):
    result = NotionExportImporter(str(notion_export)).import_export()
    projects = result.folders[0]
    notes = notes_by_title(result)

    assert [note.title for note in result.notes] == [
        "Notes", "Alpha", "Projects (overview)", "report", "Root page"
    ]
    assert (notes["Notes"].folder_id, notes["Notes"].order) == (None, 0)
    assert (notes["Alpha"].folder_id, notes["Alpha"].order) == (projects.id, 0)
    assert (notes["report"].folder_id, notes["report"].order) == (None, 1)
    assert (notes["Root page"].folder_id, notes["Root page"].order) == (None, 2)


def test_overview_note_is_redirected_into_its_folder(notion_export):
    result = NotionExportImporter(str(notion_export)).import_export()
    overview = notes_by_title(result)["Projects (overview)"]

    assert overview.folder_id == result.folders[0].id
    assert overview.order == -1
    assert block_texts(overview) == ["Overview body"]


def test_title_heading_is_stripped(notion_export):
    result = NotionExportImporter(str(notion_export)).import_export()
    alpha = json.loads(notes_by_title(result)["Alpha"].content)

    assert [block["type"] for block in alpha] == ["paragraph", "image"]
    assert alpha[1]["props"]["url"] == "Alpha/diagram.png"


def test_attachment_placeholder(notion_export):
    result = NotionExportImporter(str(notion_export)).import_export()
    report = json.loads(notes_by_title(result)["report"].content)

    assert len(report) == 2
    assert report[0]["content"][0] == {"type": "text", "text": "PDF document - 2.0 KB", "styles": {"italic": True}}
    assert report[1]["content"][0] == {"type": "text", "text": "Original file: report.pdf", "styles": {"code": True}}


def test_attachment_bundle_contributes_nothing(tmp_path):
    root = tmp_path / "export"
    bundle = root / "Only files 55555555555555555555555555555555"
    bundle.mkdir(parents=True)
    (bundle / "photo.png").write_bytes(b"\x89PNG")
    (bundle / "scan.pdf").write_bytes(b"%PDF")

    result = NotionExportImporter(str(root)).import_export()

    assert result.folders == []
    assert result.notes == []


def test_multiple_top_level_directories_become_root_folders(tmp_path):
    root = tmp_path / "export"
    for name in ("Private 66666666666666666666666666666666", "Shared 77777777777777777777777777777777"):
        (root / name / "Nested").mkdir(parents=True)
        (root / name / "Nested" / "deep.md").write_text("deep")
        (root / name / "page.md").write_text("text")

    result = NotionExportImporter(str(root)).import_export()

    roots = [folder for folder in result.folders if folder.parent_id is None]
    assert [(folder.name, folder.order) for folder in roots] == [("Private", 0), ("Shared", 1)]

    nested = [folder for folder in result.folders if folder.name == "Nested"]
    assert [folder.parent_id for folder in nested] == [roots[0].id, roots[1].id]
    assert all(folder.order == 0 for folder in nested)

    pages = [note for note in result.notes if note.title == "page"]
    assert [note.folder_id for note in pages] == [roots[0].id, roots[1].id]


def test_empty_overview_is_dropped(tmp_path):
    root = tmp_path / "export"
    (root / PROJECTS).mkdir(parents=True)
    (root / PROJECTS / "child.md").write_text("child")
    (root / f"{PROJECTS}.md").write_text("# Projects\n\n   \n")

    importer = NotionExportImporter(str(root))
    result = ImportResult()
    importer.walk(root, None, result)

    assert [note.title for note in result.notes] == ["child"]


def test_page_next_to_attachment_bundle_is_regular_note(tmp_path):
    root = tmp_path / "export"
    (root / ALPHA).mkdir(parents=True)
    (root / ALPHA / "image.png").write_bytes(b"\x89PNG")
    (root / f"{ALPHA}.md").write_text("# Alpha\nbody")

    importer = NotionExportImporter(str(root))
    result = ImportResult()
    importer.walk(root, "parent-id", result)

    assert result.folders == []
    assert [(note.title, note.folder_id, note.order) for note in result.notes] == [("Alpha", "parent-id", 0)]


def test_html_files_are_skipped(tmp_path):
    (tmp_path / "index.html").write_text("<html></html>")
    (tmp_path / "page.md").write_text("text")

    result = ImportResult()
    NotionExportImporter(str(tmp_path), skip_extensions=[".HTML"]).walk(tmp_path, None, result)

    assert [note.title for note in result.notes] == ["page"]


def test_unreadable_directory_is_skipped(tmp_path, caplog):
    root = tmp_path / "export"
    for name in ("Broken", "Fine"):
        (root / name).mkdir(parents=True)
        (root / name / "page.md").write_text("text")

    real_classify = classify_directory

    def flaky_classify(path):
        if path.name == "Broken":
            raise PermissionError(13, "Permission denied", str(path))
        return real_classify(path)

    result = ImportResult()
    with patch("notion_import.importers.notion_export.classify_directory", side_effect=flaky_classify):
        with caplog.at_level(logging.WARNING):
            NotionExportImporter(str(root)).walk(root, None, result)

    assert [folder.name for folder in result.folders] == ["Fine"]
    assert result.folders[0].order == 0
    assert len(result.notes) == 1
    assert "Cannot read directory" in caplog.text


def test_missing_directory_logs_warning(tmp_path, caplog):
    result = ImportResult()
    with caplog.at_level(logging.WARNING):
        NotionExportImporter(str(tmp_path)).walk(tmp_path / "missing", None, result)

    assert result.folders == [] and result.notes == []
    assert "Cannot read directory" in caplog.text


def test_undecodable_markdown_is_skipped(tmp_path, caplog):
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe broken")
    (tmp_path / "good.md").write_text("fine")

    result = ImportResult()
    with caplog.at_level(logging.WARNING):
        NotionExportImporter(str(tmp_path)).walk(tmp_path, None, result)

    assert [(note.title, note.order) for note in result.notes] == [("good", 0)]
    assert "Cannot read file" in caplog.text


def test_export_path_must_be_directory(tmp_path):
    with pytest.raises(NotADirectoryError):
        NotionExportImporter(str(tmp_path / "nope")).import_export()


def test_classify_directory(tmp_path):
    bundle = tmp_path / "bundle"
    bundle.mkdir()
    (bundle / "a.png").write_bytes(b"")
    assert classify_directory(bundle) is DirectoryKind.ATTACHMENT_BUNDLE

    with_page = tmp_path / "with_page"
    with_page.mkdir()
    (with_page / "Page.MD").write_text("")
    assert classify_directory(with_page) is DirectoryKind.CONTENT_FOLDER

    with_subdir = tmp_path / "with_subdir"
    (with_subdir / "inner").mkdir(parents=True)
    assert classify_directory(with_subdir) is DirectoryKind.CONTENT_FOLDER


def test_classify_file():
    folder = FolderRecord(name="Projects", order=0)
    siblings = {PROJECTS: folder}

    overview = classify_file(Path(f"/x/{PROJECTS}.md"), siblings)
    assert overview.kind is FileKind.OVERVIEW_NOTE
    assert overview.folder is folder

    assert classify_file(Path("/x/Other.md"), siblings).kind is FileKind.REGULAR_NOTE
    assert classify_file(Path("/x/index.html"), siblings).kind is FileKind.SKIPPED
    assert classify_file(Path("/x/data.csv"), siblings).kind is FileKind.ATTACHMENT


@pytest.mark.parametrize("extension, size, expected", [
    (".pdf", 2048, "PDF document - 2.0 KB"),
    (".JPEG".lower(), 512, "Image (JPEG) - 0.5 KB"),
    (".bin", 3 * 1024 * 1024, "File (.bin) - 3.0 MB"),
    ("", 0, "File () - 0.0 KB"),
])
def test_describe_file(extension, size, expected):
    assert describe_file(extension, size) == expected


def test_format_size_switches_to_megabytes_above_one_mebibyte():
    assert format_size(1024 * 1024) == "1024.0 KB"
    assert format_size(1024 * 1024 + 1) == "1.0 MB"


def test_empty_title_heading_keeps_body(tmp_path):
    (tmp_path / "page.md").write_text("# \nImportant body\nmore")

    result = ImportResult()
    NotionExportImporter(str(tmp_path)).walk(tmp_path, None, result)

    assert block_texts(result.notes[0]) == ["Important body", "more"]

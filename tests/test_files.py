import pytest

from dumpkit.files import replace_in_path


def _tree(root):
    (root / "sub").mkdir(parents=True)
    (root / "a.php").write_text("<?php $u = 'http://a.com';\n")
    (root / "b.JSON").write_text('{"u": "nothing here"}')
    (root / "sub" / "c.css").write_text("body{background:url(http://a.com/x.png)}")
    (root / "image.png").write_bytes(b"http://a.com")
    (root / "blob.txt").write_bytes(b"http://a.com\x00binary")
    return root


def test_replace_in_path_updates_text_files(tmp_path):
    root = _tree(tmp_path / "site")
    result = replace_in_path(root, "http://a.com", "https://b.org")
    assert result == {"files_checked": 3, "files_modified": 2}
    assert (root / "a.php").read_text() == "<?php $u = 'https://b.org';\n"
    assert "https://b.org/x.png" in (root / "sub" / "c.css").read_text()


def test_replace_in_path_leaves_binary_and_unknown_extensions(tmp_path):
    root = _tree(tmp_path / "site")
    replace_in_path(root, "http://a.com", "https://b.org")
    assert (root / "image.png").read_bytes() == b"http://a.com"
    assert (root / "blob.txt").read_bytes() == b"http://a.com\x00binary"


def test_replace_in_path_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        replace_in_path(tmp_path / "nope", "a", "b")

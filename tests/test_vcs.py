from bsfkit.vcs import get_leaf_dir, ignore


def test_leaf_dir_at_root():
    assert get_leaf_dir("/repo/", "/repo") == ""


def test_leaf_dir_nested():
    assert get_leaf_dir("/repo/", "/repo/sub/dir") == "sub/dir"


def test_leaf_dir_unrelated_path_unchanged():
    assert get_leaf_dir("/repo/", "/elsewhere") == "/elsewhere"


def test_ignore_creates_file(tmp_path):
    ignore("bsf-result/", tmp_path)
    assert (tmp_path / ".gitignore").read_text() == "\nbsf-result/"


def test_ignore_is_idempotent(tmp_path):
    ignore("bsf-result/", tmp_path)
    ignore("bsf-result/", tmp_path)
    assert (tmp_path / ".gitignore").read_text().count("bsf-result/") == 1


def test_ignore_appends_to_existing(tmp_path):
    (tmp_path / ".gitignore").write_text("node_modules/")
    ignore("bsf-result/", tmp_path)
    assert (tmp_path / ".gitignore").read_text() == "node_modules/\nbsf-result/"


def test_ignore_skips_when_substring_present(tmp_path):
    (tmp_path / ".gitignore").write_text("out/bsf-result/\n")
    ignore("bsf-result/", tmp_path)
    assert (tmp_path / ".gitignore").read_text() == "out/bsf-result/\n"
"""Shared diff fixtures."""

import pytest

HELLO_DIFF = (
    "diff --git a/hello.txt b/hello.txt\n"
    "index 83db48f..bf269f4 100644\n"
    "--- a/hello.txt\n"
    "+++ b/hello.txt\n"
    "@@ -1,3 +1,4 @@\n"
    " line one\n"
    "-line two\n"
    "+line two modified\n"
    "+line three new\n"
    " line four\n"
)

MULTI_FILE_DIFF = (
    "diff --git a/src/app.py b/src/app.py\n"
    "index 1111111..2222222 100644\n"
    "--- a/src/app.py\n"
    "+++ b/src/app.py\n"
    "@@ -10,4 +10,5 @@ def main():\n"
    "     args = parse()\n"
    "-    run(args)\n"
    "+    config = load()\n"
    "+    run(args, config)\n"
    "     return 0\n"
    " \n"
    "@@ -40,3 +41,2 @@ class Runner:\n"
    "     def stop(self):\n"
    "-        self.flush()\n"
    "         self.close()\n"
    "diff --git a/README.md b/README.md\n"
    "new file mode 100644\n"
    "index 0000000..3333333\n"
    "--- /dev/null\n"
    "+++ b/README.md\n"
    "@@ -0,0 +1,2 @@\n"
    "+# Title\n"
    "+Body\n"
)

RENAME_DIFF = (
    "diff --git a/old/name.py b/new/name.py\n"
    "similarity index 90%\n"
    "rename from old/name.py\n"
    "rename to new/name.py\n"
    "index 4444444..5555555 100644\n"
    "--- a/old/name.py\n"
    "+++ b/new/name.py\n"
    "@@ -1 +1 @@\n"
    "-VALUE = 1\n"
    "+VALUE = 2\n"
)


@pytest.fixture
def hello_diff():
    return HELLO_DIFF


@pytest.fixture
def multi_file_diff():
    return MULTI_FILE_DIFF


@pytest.fixture
def rename_diff():
    return RENAME_DIFF

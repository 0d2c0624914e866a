"""Names of the artifact manager service methods used by the archiver."""

from enum import StrEnum


class ArtifactMethod(StrEnum):
    LIST_FILES = "list_files"
    GET_FILE = "get_file"
    PUT_FILE = "put_file"
    EDIT = "edit"
    COMMIT = "commit"
    DISCARD = "discard"

"""Shared fixtures for classforge tests."""

import logging
from pathlib import Path
from typing import Iterator

import pytest

from classforge.layout import ClassList, Field, FieldKind
from classforge.project import DataClass, DataField, ProjectData


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """INI file that keeps tests away from the user's settings."""
    return tmp_path / "settings.ini"


@pytest.fixture
def settings(settings_file: Path):
    from classforge.settings import AppSettings

    return AppSettings(settings_file=settings_file)


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Put back root handlers replaced by setup_logging()."""
    root = logging.getLogger()
    saved = list(root.handlers)
    saved_level = root.level
    yield
    for handler in root.handlers:
        if handler not in saved:
            handler.close()
    root.handlers[:] = saved
    root.setLevel(saved_level)


@pytest.fixture
def player_classes() -> ClassList:
    """Player with a self pointer and a Vec3 position class."""
    classes = ClassList()
    player_id = classes.add_class("Player")
    vec_id = classes.add_class("Vec3")

    player = classes.by_id(player_id)
    assert player is not None
    player.append_field(Field("health", FieldKind.I32))
    player.add_bytes(4)
    player.append_field(Field.pointer("next", player_id))
    player.append_field(Field.pointer("position", vec_id))

    vec = classes.by_id(vec_id)
    assert vec is not None
    for axis in ("x", "y", "z"):
        vec.append_field(Field(axis, FieldKind.F32))
    vec.add_bytes(4)

    return classes


@pytest.fixture
def player_data() -> ProjectData:
    """Project data of the single self-referencing Player class."""
    return ProjectData(classes=[
        DataClass(name="Player", fields=[
            DataField(name="health", offset=0, kind=FieldKind.I32),
            DataField(name="next", offset=8, kind=FieldKind.PTR, metadata="Player"),
        ])
    ])

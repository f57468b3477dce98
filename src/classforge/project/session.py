"""Editing session for a single project.

Holds the live class list and the path of the project file, and moves the
list to and from disk. A session is passed explicitly to whatever edits the
project; there is no process-wide project state.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from ..layout.classes import ClassList
from ..layout.types import ClassId
from .models import ProjectData

if TYPE_CHECKING:
    from ..settings import AppSettings


class ProjectSession:
    """Owns the class list being edited.

    Mutating the class list requires exclusive access to the session;
    callers serialize edits themselves.
    """

    def __init__(self, settings: Optional["AppSettings"] = None):
        """Initialize an empty, unsaved project.

        Args:
            settings: Optional AppSettings used for recent projects and defaults
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings

        self.class_list = ClassList()
        self.project_path: Optional[Path] = None
        self._dirty = False

    @property
    def dirty(self) -> bool:
        """True if the class list changed since it was last saved or opened."""
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    # === CLASS HELPERS ===

    def add_class(self, name: Optional[str] = None, size: Optional[int] = None) -> ClassId:
        """Add a class to the project.

        Without a name, a unique name based on the configured default class
        name is used. A new class gets `size` bytes of padding, or the
        configured default byte count when `size` is None.

        Returns:
            Id of the new class (or of the existing class named `name`)

        Raises:
            ValueError: If `name` is empty
        """
        base = self.settings.default_class_name if self.settings else "NewClass"
        if size is None:
            size = self.settings.default_add_bytes if self.settings else 64

        if name is None:
            name = self.class_list.unique_name(base)
        elif self.class_list.by_name(name) is not None:
            self.logger.debug(f"Class '{name}' already exists")
            return self.class_list.add_class(name)

        class_id = self.class_list.add_class(name)
        cls = self.class_list.by_id(class_id)
        if cls is not None and size > 0:
            cls.add_bytes(size)

        self.mark_dirty()
        return class_id

    # === PROJECT FILES ===

    def new_project(self) -> None:
        """Discard the current class list and start an unsaved project."""
        self.logger.info("Starting new project")
        self.class_list = ClassList()
        self.project_path = None
        self._dirty = False

    def open_project(self, path: Union[str, Path]) -> bool:
        """Replace the class list with the contents of a project file.

        On any read or parse failure the current class list is left as is.

        Args:
            path: Project file to open

        Returns:
            True if the project was opened
        """
        path = Path(path)
        try:
            text = path.read_bytes()
        except OSError as e:
            self.logger.error(f"Could not read project {path}: {e}")
            return False

        data = ProjectData.from_str(text)
        if data is None:
            self.logger.error(f"Could not open project {path}: invalid project file")
            return False

        self.class_list = data.load()
        self.project_path = path
        self._dirty = False
        self._remember(path)

        self.logger.info(f"Opened project {path} with {len(self.class_list)} class(es)")
        return True

    def open_recent(self, path: Union[str, Path]) -> bool:
        """Open a project from the recent list, dropping it from the list on failure."""
        if self.open_project(path):
            return True

        if self.settings is not None and self.settings.remove_recent_project(path):
            self.logger.info(f"Removed {path} from recent projects")
        return False

    def save_project(self, path: Optional[Union[str, Path]] = None) -> bool:
        """Write the class list to `path`, or to the current project path.

        Returns:
            False if no path is known or the file cannot be written

        Raises:
            LayoutInvariantError: If the class list is structurally broken
        """
        target = Path(path) if path is not None else self.project_path
        if target is None:
            self.logger.warning("Project has no file yet, use save_project_as()")
            return False

        text = ProjectData.store(self.class_list).to_string()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        except OSError as e:
            self.logger.error(f"Could not save project {target}: {e}")
            return False

        self.project_path = target
        self._dirty = False
        self._remember(target)

        self.logger.info(f"Saved project {target}")
        return True

    def save_project_as(self, path: Union[str, Path]) -> bool:
        """Save under a new path and make it the current project path."""
        return self.save_project(path)

    def _remember(self, path: Path) -> None:
        if self.settings is None:
            return
        self.settings.add_recent_project(path)
        self.settings.last_project = path

"""Find-or-create resolution of folder paths."""

from __future__ import annotations

import functools
import logging
from typing import Iterable

from drive_uploader.exceptions import AmbiguousNameError, FolderError
from drive_uploader.models import (
    MultipleMatches,
    NodeKind,
    SingleMatch,
    lookup_from_nodes,
)
from drive_uploader.transport import DriveTransport

logger = logging.getLogger(__name__)


class FolderResolver:
    """Maps folder names onto folder ids, creating missing folders."""

    def __init__(self, transport: DriveTransport) -> None:
        self._transport = transport

    def resolve_folder(self, parent_id: str, folder_name: str) -> str:
        """Return the id of the folder ``folder_name`` under ``parent_id``.

        The folder is created when it does not exist yet.

        Raises:
            AmbiguousNameError: If several folders share the name
            FolderError: If creation does not yield an id
        """
        logger.debug(f"Getting folder with name '{folder_name}' under folder '{parent_id}'")
        lookup = lookup_from_nodes(self._transport.list(parent_id, folder_name, NodeKind.FOLDER))

        if isinstance(lookup, SingleMatch):
            logger.debug(f"Folder '{folder_name}' found: {lookup.node.id}")
            return lookup.node.id
        if isinstance(lookup, MultipleMatches):
            raise AmbiguousNameError(folder_name, parent_id, len(lookup.nodes))

        logger.debug(f"Creating folder '{folder_name}' under folder '{parent_id}'")
        folder = self._transport.create(parent_id, folder_name, NodeKind.FOLDER)
        if not folder.id:
            raise FolderError(f"Failed to create folder '{folder_name}' under '{parent_id}'")
        logger.info(f"Created folder '{folder_name}': {folder.id}")
        return folder.id

    def resolve_path(self, parent_id: str, folder_names: Iterable[str]) -> str:
        """Resolve nested folders left to right and return the innermost id.

        Each segment is looked up under the id returned for the previous one,
        so the calls are strictly sequential.
        """
        return functools.reduce(self.resolve_folder, folder_names, parent_id)

"""
Admin-only options once a matrix line has recorded progress.

When a project has moved a service past "0%" (or deployed it), only
admins may set it back to the lowest options. These helpers return the
option list to render for the current value and user; locked entries come
back with ``disabled=True`` and an explanatory title.

Catalog tuples are never modified: every call returns a fresh list.
"""

from __future__ import annotations

import dataclasses
import logging

from dad.models.option import Option
from dad.utils.helpers import to_level

logger = logging.getLogger(__name__)

LOCKED_TITLE = "Only Admin users can now return back to these values"

# Index, in the progress/goal catalog, of the first level that counts as
# recorded progress ("20%"). Entries below it lock once it is reached.
PROGRESS_LOCK_INDEX = 2

DEPLOYED_VALUE = "yes"


def _lock_below(options, index: int) -> list[Option]:
    return [
        dataclasses.replace(option, disabled=True, title=LOCKED_TITLE) if i < index else option
        for i, option in enumerate(options)
    ]


def get_progress_options(options, current_value, is_admin: bool) -> list[Option]:
    """Options for a progress or goal dropdown.

    ``current_value`` is the stored level: an int, the ``-1`` sentinel, or
    None. For non-admins, the first two entries ("N/A", "0%") are disabled
    once the current level reaches the catalog's third entry.
    """
    options = list(options)
    if is_admin or len(options) <= PROGRESS_LOCK_INDEX:
        return options

    level = to_level(current_value)
    threshold = to_level(options[PROGRESS_LOCK_INDEX].value)
    if level is None or threshold is None or level < threshold:
        return options

    logger.debug("Locking progress options below %s (current=%s)", threshold, level)
    return _lock_below(options, PROGRESS_LOCK_INDEX)


def get_deployed_options(options, current_value, is_admin: bool) -> list[Option]:
    """Options for the "deployed" dropdown.

    Once a service is deployed, non-admins cannot set it back: every entry
    ranked below the deployed state is disabled. The current value matches
    the deployed state by value or text, case-insensitively ("yes"/"Yes").
    """
    options = list(options)
    if is_admin or not isinstance(current_value, str):
        return options

    wanted = current_value.casefold()
    if wanted != DEPLOYED_VALUE:
        return options

    for index, option in enumerate(options):
        if str(option.value).casefold() == DEPLOYED_VALUE or option.text.casefold() == DEPLOYED_VALUE:
            return _lock_below(options, index)
    return options

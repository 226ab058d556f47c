"""Admin-only progress / deployment options."""

from dad.services.admin_lock import (
    LOCKED_TITLE,
    get_deployed_options,
    get_progress_options,
)
from dad.services.options import DEPLOYED_OPTIONS, PROGRESS_OPTIONS


class TestProgressOptions:
    def test_not_applicable_leaves_all_enabled(self):
        options = get_progress_options(PROGRESS_OPTIONS, -1, False)
        assert options == list(PROGRESS_OPTIONS)
        assert not any(o.disabled for o in options)

    def test_zero_percent_leaves_all_enabled(self):
        options = get_progress_options(PROGRESS_OPTIONS, 0, False)
        assert not any(o.disabled for o in options)

    def test_twenty_percent_locks_first_two(self):
        options = get_progress_options(PROGRESS_OPTIONS, 1, False)
        assert [o.disabled for o in options[:2]] == [True, True]
        assert all(o.title == LOCKED_TITLE for o in options[:2])
        assert not any(o.disabled for o in options[2:])
        assert options[2:] == list(PROGRESS_OPTIONS[2:])

    def test_locked_entries_keep_value_and_text(self):
        options = get_progress_options(PROGRESS_OPTIONS, 5, False)
        assert [(o.value, o.text) for o in options[:2]] == [(-1, "N/A"), (0, "0%")]

    def test_admin_never_locked(self):
        for level in (-1, 0, 1, 3, 5, None):
            options = get_progress_options(PROGRESS_OPTIONS, level, True)
            assert not any(o.disabled for o in options)

    def test_unset_value_not_locked(self):
        options = get_progress_options(PROGRESS_OPTIONS, None, False)
        assert not any(o.disabled for o in options)

    def test_catalog_untouched(self):
        before = [o.title for o in PROGRESS_OPTIONS]
        get_progress_options(PROGRESS_OPTIONS, 4, False)
        assert [o.title for o in PROGRESS_OPTIONS] == before
        assert not any(o.disabled for o in PROGRESS_OPTIONS)

    def test_returns_new_list(self):
        options = get_progress_options(PROGRESS_OPTIONS, -1, False)
        assert isinstance(options, list)
        assert options is not PROGRESS_OPTIONS


class TestDeployedOptions:
    def test_deployed_locks_no(self):
        options = get_deployed_options(DEPLOYED_OPTIONS, "yes", False)
        assert options[0].value == "no"
        assert options[0].disabled
        assert options[0].title == LOCKED_TITLE
        assert not options[1].disabled

    def test_case_insensitive(self):
        options = get_deployed_options(DEPLOYED_OPTIONS, "Yes", False)
        assert options[0].disabled

    def test_not_deployed_leaves_enabled(self):
        options = get_deployed_options(DEPLOYED_OPTIONS, "no", False)
        assert not any(o.disabled for o in options)

    def test_admin_never_locked(self):
        options = get_deployed_options(DEPLOYED_OPTIONS, "yes", True)
        assert not any(o.disabled for o in options)

    def test_missing_value(self):
        options = get_deployed_options(DEPLOYED_OPTIONS, None, False)
        assert options == list(DEPLOYED_OPTIONS)

    def test_catalog_untouched(self):
        get_deployed_options(DEPLOYED_OPTIONS, "yes", False)
        assert not any(o.disabled for o in DEPLOYED_OPTIONS)

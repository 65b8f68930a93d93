"""Tests for bootstrap file rendering."""

from __future__ import annotations

from sass_bootstrapper.config import BootstrapOptions
from sass_bootstrapper.formatter import HEADER_LINES, import_path, render_bootstrap
from sass_bootstrapper.models import Partial


def _partial(file_path: str, group: str) -> Partial:
    return Partial(file_path=file_path, last_modified=0, group_key=group)


class TestRenderBootstrap:
    """Test render_bootstrap()."""

    def test_scss_output_groups_and_semicolons(self):
        options = BootstrapOptions(filter_root_paths=["src/"], bootstrap_file="src/bootstrap.scss")
        partials = [
            _partial("src/core/_reset.scss", "core"),
            _partial("src/core/grid.scss", "core"),
            _partial("src/theme/main.scss", "theme"),
            _partial("src/print.scss", "*root*"),
        ]

        content = render_bootstrap(partials, options)

        assert content == "\n".join(
            [
                *HEADER_LINES,
                "",
                "// core",
                '@import "core/reset";',
                '@import "core/grid";',
                "",
                "// theme",
                '@import "theme/main";',
                "",
                "// *root*",
                '@import "print";',
                "",
            ]
        )

    def test_sass_output_has_no_delimiter(self):
        options = BootstrapOptions(filter_root_paths=["src/"], bootstrap_file="src/bootstrap.sass")
        content = render_bootstrap([_partial("src/core/grid.scss", "core")], options)
        assert content.splitlines()[-1] == '@import "core/grid"'

    def test_group_header_repeats_when_group_returns(self):
        options = BootstrapOptions(filter_root_paths=["src/"], bootstrap_file="out.scss")
        partials = [
            _partial("src/core/a.scss", "core"),
            _partial("src/theme/b.scss", "theme"),
            _partial("src/core/c.scss", "core"),
        ]
        content = render_bootstrap(partials, options)
        assert content.count("// core") == 2

    def test_empty_order_renders_header_only(self):
        content = render_bootstrap([], BootstrapOptions())
        assert content == "\n".join(HEADER_LINES) + "\n"


class TestImportPath:
    """Test path emission modes."""

    def test_root_stripped_path(self):
        options = BootstrapOptions(filter_root_paths=["app/styles/", "bower_components/"])
        assert import_path(_partial("bower_components/lib/_x.scss", "lib"), options) == "lib/x"

    def test_relative_path(self):
        options = BootstrapOptions(bootstrap_file="build/bootstrap.scss", use_relative_paths=True)
        assert import_path(_partial("app/styles/core/_x.scss", "core"), options) == "../app/styles/core/x"

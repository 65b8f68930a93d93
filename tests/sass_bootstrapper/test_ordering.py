"""Tests for dependency ordering and cycle detection."""

from __future__ import annotations

import logging
import sys

import pytest

from sass_bootstrapper.errors import CycleError
from sass_bootstrapper.ordering import order_partials, resolve_requirement


class TestOrderPartials:
    """Test order_partials()."""

    def test_required_partial_comes_first(self, write_partial, make_registry):
        write_partial("a.scss", "")
        write_partial("b.scss", '// #requires "a"')
        registry = make_registry(["b.scss", "a.scss"])

        assert order_partials(registry) == ["a", "b"]

    def test_already_satisfied_order_is_kept(self, write_partial, make_registry):
        write_partial("a.scss", "")
        write_partial("b.scss", '// #requires "a"')
        registry = make_registry(["a.scss", "b.scss"])

        assert order_partials(registry) == ["a", "b"]

    def test_unconstrained_partials_keep_seed_order(self, write_partial, make_registry):
        for name in ("one", "two", "three"):
            write_partial(f"{name}.scss", "")
        registry = make_registry(["two.scss", "three.scss", "one.scss"])

        assert order_partials(registry) == ["two", "three", "one"]

    def test_requirement_chain(self, write_partial, make_registry):
        write_partial("grid.scss", '// #requires "mixins"')
        write_partial("mixins.scss", '// #requires "vars"')
        write_partial("vars.scss", "")
        registry = make_registry(["grid.scss", "mixins.scss", "vars.scss"])

        assert order_partials(registry) == ["vars", "mixins", "grid"]

    def test_explicit_seed(self, write_partial, make_registry):
        write_partial("a.scss", "")
        write_partial("b.scss", "")
        registry = make_registry(["a.scss", "b.scss"])

        assert order_partials(registry, seed=["b", "a"]) == ["b", "a"]

    def test_folder_qualified_pattern(self, write_partial, make_registry):
        write_partial("theme/main.scss", '// #requires "core/reset"')
        write_partial("core/_reset.scss", "")
        registry = make_registry(["theme/main.scss", "core/_reset.scss"])

        assert order_partials(registry) == ["core/_reset", "theme/main"]

    def test_self_match_is_ignored(self, write_partial, make_registry):
        write_partial("grid.scss", '// #requires "grid"')
        registry = make_registry(["grid.scss"])

        assert order_partials(registry) == ["grid"]

    def test_unresolved_requirement_warns(self, write_partial, make_registry, caplog):
        write_partial("a.scss", '// #requires "missing"')
        write_partial("b.scss", "")
        registry = make_registry(["a.scss", "b.scss"])

        with caplog.at_level(logging.WARNING):
            assert order_partials(registry) == ["a", "b"]
        assert 'depends on non-existing partial "missing"' in caplog.text

    def test_every_requirement_precedes_its_dependent(self, write_partial, make_registry):
        write_partial("e.scss", '// #requires "d"\n// #requires "b"')
        write_partial("d.scss", '// #requires "c"')
        write_partial("c.scss", "")
        write_partial("b.scss", '// #requires "a"')
        write_partial("a.scss", '// #requires "c"')
        registry = make_registry(["e.scss", "d.scss", "c.scss", "b.scss", "a.scss"])

        order = order_partials(registry)

        assert sorted(order) == ["a", "b", "c", "d", "e"]
        position = {key: index for index, key in enumerate(order)}
        for key in order:
            for requirement in registry[key].declared_requires:
                required = resolve_requirement(requirement.pattern, registry.partials())
                assert position[required.canonical_key] < position[key]


    def test_chain_longer_than_recursion_limit(self, write_partial, make_registry):
        length = sys.getrecursionlimit() + 200
        names = [f"p{index:05d}" for index in range(length)]
        for name, required in zip(names, names[1:]):
            write_partial(f"{name}.scss", f'// #requires "{required}"')
        write_partial(f"{names[-1]}.scss", "")
        registry = make_registry([f"{name}.scss" for name in names])

        assert order_partials(registry) == names[::-1]


class TestCycleDetection:
    """Mutually requiring partials abort ordering."""

    def test_two_partial_cycle(self, write_partial, make_registry):
        write_partial("x.scss", '// #requires "y"')
        write_partial("y.scss", '// #requires "x"')
        registry = make_registry(["x.scss", "y.scss"])

        with pytest.raises(CycleError) as excinfo:
            order_partials(registry)

        assert {excinfo.value.requiring_file, excinfo.value.required_file} == {"x.scss", "y.scss"}
        assert "x.scss" in str(excinfo.value)
        assert "y.scss" in str(excinfo.value)

    def test_longer_cycle(self, write_partial, make_registry):
        write_partial("x.scss", '// #requires "y"')
        write_partial("y.scss", '// #requires "z"')
        write_partial("z.scss", '// #requires "x"')
        registry = make_registry(["x.scss", "y.scss", "z.scss"])

        with pytest.raises(CycleError):
            order_partials(registry)

    def test_cycle_closing_a_long_chain(self, write_partial, make_registry):
        length = sys.getrecursionlimit() + 200
        names = [f"p{index:05d}" for index in range(length)]
        for name, required in zip(names, names[1:] + names[:1]):
            write_partial(f"{name}.scss", f'// #requires "{required}"')
        registry = make_registry([f"{name}.scss" for name in names])

        with pytest.raises(CycleError) as excinfo:
            order_partials(registry)

        assert excinfo.value.requiring_file == f"{names[-1]}.scss"
        assert excinfo.value.required_file == f"{names[0]}.scss"


def test_resolve_requirement_returns_first_match(write_partial, make_registry):
    write_partial("btn.scss", "")
    write_partial("btn-group.scss", "")
    registry = make_registry(["btn-group.scss", "btn.scss"])

    assert resolve_requirement("btn", registry.partials()).canonical_key == "btn-group"
    assert resolve_requirement("nothing", registry.partials()) is None

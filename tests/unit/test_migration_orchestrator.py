"""Tests for MigrationOrchestrator and the programmatic API."""

import textwrap

import pytest

from splurge_enzyme_to_rtl import main as main_module
from splurge_enzyme_to_rtl.context import MigrationConfig
from splurge_enzyme_to_rtl.events import EventBus, PipelineStartedEvent
from splurge_enzyme_to_rtl.exceptions import ParseError, ValidationError
from splurge_enzyme_to_rtl.migration_orchestrator import MigrationOrchestrator

ENZYME_TEST = textwrap.dedent(
    """\
    import { shallow } from 'enzyme';

    it('renders', () => {
      const wrapper = shallow(<Title />);
      expect(wrapper.find('[data-testid="title"]').text()).toBe('Hello');
    });
    """
)

CONVERTED = textwrap.dedent(
    """\
    import { render, screen } from "@testing-library/react";

    it('renders', () => {
      render(<Title />);
      expect(screen.getByTestId("title")).toHaveTextContent('Hello');
    });
    """
)


@pytest.fixture
def orchestrator():
    return MigrationOrchestrator(EventBus())


@pytest.fixture
def enzyme_file(tmp_path):
    path = tmp_path / "src" / "Title.test.jsx"
    path.parent.mkdir()
    path.write_text(ENZYME_TEST, encoding="utf-8")
    return path


class TestMigrateFile:
    def test_writes_to_target_root(self, orchestrator, enzyme_file, tmp_path):
        config = MigrationConfig(target_root=str(tmp_path / "out"))

        result = orchestrator.migrate_file(str(enzyme_file), config)

        target = tmp_path / "out" / "Title.test.jsx"
        assert result.is_success()
        assert result.data == str(target)
        assert target.read_text(encoding="utf-8") == CONVERTED
        assert result.metadata["generated_code"] == CONVERTED
        assert enzyme_file.read_text(encoding="utf-8") == ENZYME_TEST
        assert not (enzyme_file.parent / "Title.test.jsx.backup").exists()

    def test_in_place_keeps_backup(self, orchestrator, enzyme_file):
        result = orchestrator.migrate_file(str(enzyme_file))

        assert result.is_success()
        assert enzyme_file.read_text(encoding="utf-8") == CONVERTED
        assert (enzyme_file.parent / "Title.test.jsx.backup").read_text(encoding="utf-8") == ENZYME_TEST

    def test_suffix_and_extension(self, orchestrator, enzyme_file):
        result = orchestrator.migrate_file(str(enzyme_file), MigrationConfig(target_suffix=".rtl", target_extension="tsx"))

        assert result.data == str(enzyme_file.parent / "Title.test.rtl.tsx")

    def test_dry_run_writes_nothing(self, orchestrator, enzyme_file):
        result = orchestrator.migrate_file(str(enzyme_file), MigrationConfig(dry_run=True))

        assert result.metadata["generated_code"] == CONVERTED
        assert enzyme_file.read_text(encoding="utf-8") == ENZYME_TEST

    def test_syntax_error_fails(self, orchestrator, tmp_path):
        broken = tmp_path / "Broken.test.js"
        broken.write_text("it('x', () => {\n", encoding="utf-8")

        result = orchestrator.migrate_file(str(broken))

        assert result.is_error()
        assert isinstance(result.error, ParseError)
        assert broken.read_text(encoding="utf-8") == "it('x', () => {\n"

    def test_missing_file_fails(self, orchestrator, tmp_path):
        assert orchestrator.migrate_file(str(tmp_path / "nope.test.js")).is_error()

    def test_oversized_file_fails(self, orchestrator, enzyme_file):
        enzyme_file.write_text(ENZYME_TEST + "//" + "x" * (1024 * 1024) + "\n", encoding="utf-8")

        result = orchestrator.migrate_file(str(enzyme_file), MigrationConfig(max_file_size_mb=1))

        assert isinstance(result.error, ValidationError)

    def test_dom_snapshot_file_is_loaded(self, orchestrator, tmp_path):
        source = tmp_path / "List.test.jsx"
        source.write_text(
            "import { mount } from 'enzyme';\nconst w = mount(<List />);\nw.find('.row');\n", encoding="utf-8"
        )
        snapshot = tmp_path / "List.html"
        snapshot.write_text('<div class="row" data-testid="first-row"></div>', encoding="utf-8")

        result = orchestrator.migrate_file(
            str(source), MigrationConfig(dry_run=True, dom_snapshot_file=str(snapshot))
        )

        assert "--> screen.getByTestId('first-row')" in result.metadata["generated_code"]

    def test_events_are_published(self, enzyme_file):
        bus = EventBus()
        started = []
        bus.subscribe(PipelineStartedEvent, started.append)

        MigrationOrchestrator(bus).migrate_file(str(enzyme_file), MigrationConfig(dry_run=True))

        assert [event.context.source_file for event in started] == [str(enzyme_file)]


class TestDirectories:
    def test_find_enzyme_files_uses_detector(self, orchestrator, tmp_path):
        (tmp_path / "a.test.jsx").write_text(ENZYME_TEST, encoding="utf-8")
        (tmp_path / "b.test.jsx").write_text("// mount(<A />) is only mentioned here\n", encoding="utf-8")
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "c.spec.tsx").write_text("import { mount } from 'enzyme';\n", encoding="utf-8")
        (nested / "helper.js").write_text(ENZYME_TEST, encoding="utf-8")

        found = orchestrator.find_enzyme_files(tmp_path, MigrationConfig())

        assert found == [str(tmp_path / "a.test.jsx"), str(nested / "c.spec.tsx")]
        assert orchestrator.find_enzyme_files(tmp_path, MigrationConfig(recurse_directories=False)) == [
            str(tmp_path / "a.test.jsx")
        ]

    def test_migrate_directory_collects_failures(self, orchestrator, tmp_path):
        (tmp_path / "a.test.jsx").write_text(ENZYME_TEST, encoding="utf-8")
        (tmp_path / "b.test.jsx").write_text(
            "import { mount } from 'enzyme';\nmount(<A />);\nshallow(<B />);\n", encoding="utf-8"
        )

        result = orchestrator.migrate_directory(str(tmp_path), MigrationConfig(dry_run=True))

        assert result.is_warning()
        assert result.data == [str(tmp_path / "a.test.jsx")]
        assert result.metadata["failed_files"] == [str(tmp_path / "b.test.jsx")]

    def test_migrate_directory_rejects_files(self, orchestrator, enzyme_file):
        assert orchestrator.migrate_directory(str(enzyme_file)).is_error()


class TestConvertSource:
    def test_in_memory_conversion(self, orchestrator):
        result = orchestrator.convert_source(ENZYME_TEST, "Title.test.jsx")

        assert result.data == CONVERTED

    def test_main_convert_source(self):
        result = main_module.convert_source("const a = 1;\n")

        assert result.is_warning()
        assert result.data == "const a = 1;\n"
        assert len(result.warnings) == 2


class TestMainMigrate:
    def test_collects_generated_code_and_failures(self, tmp_path):
        good = tmp_path / "a.test.jsx"
        good.write_text(ENZYME_TEST, encoding="utf-8")
        bad = tmp_path / "b.test.jsx"
        bad.write_text("it(\n", encoding="utf-8")

        result = main_module.migrate([str(good), str(bad)], MigrationConfig(dry_run=True))

        assert result.is_warning()
        assert result.data == [str(good)]
        assert result.metadata["generated_code"] == {str(good): CONVERTED}
        assert result.metadata["failed_files"] == [str(bad)]

    def test_fail_fast_stops_at_first_failure(self, tmp_path):
        bad = tmp_path / "b.test.jsx"
        bad.write_text("it(\n", encoding="utf-8")
        good = tmp_path / "a.test.jsx"
        good.write_text(ENZYME_TEST, encoding="utf-8")

        result = main_module.migrate([str(bad), str(good)], MigrationConfig(dry_run=True, fail_fast=True))

        assert result.is_error()
        assert result.metadata["failed_files"] == [str(bad)]

    def test_single_path_string(self, tmp_path):
        good = tmp_path / "a.test.jsx"
        good.write_text(ENZYME_TEST, encoding="utf-8")

        result = main_module.migrate(str(good), MigrationConfig(dry_run=True))

        assert result.is_success()
        assert result.data == [str(good)]

"""
Tests for GraficoModelImporter — Decoding the working directory

These tests validate:
- Empty working directory decodes to no model
- Folders, elements and references are decoded
- Missing reference targets are collected, not raised
- Malformed files and duplicate ids are fatal (GraficoError)
- Repeated imports are independent
"""

import pytest

from modelrepo.core.model import Folder
from modelrepo.grafico.importer import GraficoModelImporter, GraficoError, UnresolvedObject, split_href
from tests.factories import href


class TestEmptyWorkingDirectory:

    def test_no_model_folder(self, grafico_factory):
        importer = GraficoModelImporter(grafico_factory.repo)
        assert importer.import_as_model() is None
        assert importer.get_unresolved_objects() is None

    def test_nonexistent_directory(self, tmp_path):
        importer = GraficoModelImporter(tmp_path / "missing")
        assert importer.import_as_model() is None


class TestDecoding:

    def test_model_attributes(self, grafico_factory):
        grafico_factory.create_two_element_model()
        model = GraficoModelImporter(grafico_factory.repo).import_as_model()

        assert model.id == "id-model"
        assert model.name == "Archisurance"

    def test_folders_and_elements(self, grafico_factory):
        grafico_factory.create_two_element_model()
        model = GraficoModelImporter(grafico_factory.repo).import_as_model()

        assert [f.type for f in model.folders] == ["business", "diagrams"]
        business = model.folders[0]
        assert isinstance(business, Folder)
        assert sorted(e.name for e in business.children) == ["Alice", "Bob"]
        assert model.count() == 3

    def test_references_resolved(self, grafico_factory):
        grafico_factory.create_two_element_model()
        model = GraficoModelImporter(grafico_factory.repo).import_as_model()

        alice = model.get_object_by_id("id-a")
        bob = model.get_object_by_id("id-b")
        view = model.get_object_by_id("id-view")
        assert alice.targets("assigned") == [bob]
        assert view.targets("child") == [alice, bob]

    def test_all_resolved_reports_none(self, grafico_factory):
        grafico_factory.create_two_element_model()
        importer = GraficoModelImporter(grafico_factory.repo)
        importer.import_as_model()
        assert importer.get_unresolved_objects() is None

    def test_nested_folders(self, grafico_factory):
        grafico_factory.write_model()
        grafico_factory.add_folder("business", "id-business", type="business")
        grafico_factory.add_folder("business/id-sub", "id-sub", name="Sub")
        grafico_factory.add_element("business/id-sub", "BusinessRole", "id-role", "Clerk")

        model = GraficoModelImporter(grafico_factory.repo).import_as_model()
        role = model.get_object_by_id("id-role")
        assert role.parent.id == "id-sub"
        assert role.model is model

    def test_directory_without_folder_file_ignored(self, grafico_factory):
        grafico_factory.write_model()
        (grafico_factory.model_dir / "stray").mkdir()
        (grafico_factory.model_dir / "stray" / "x.xml").write_text("<element/>")

        model = GraficoModelImporter(grafico_factory.repo).import_as_model()
        assert model.folders == []

    def test_documentation(self, grafico_factory):
        grafico_factory.write_model()
        grafico_factory.add_folder("business", "id-business", type="business")
        grafico_factory.add_element("business", "BusinessActor", "id-a", "Alice", documentation="Customer")

        model = GraficoModelImporter(grafico_factory.repo).import_as_model()
        assert model.get_object_by_id("id-a").documentation == "Customer"

    def test_reference_resolves_after_folder_move(self, grafico_factory):
        """Href path is stale but the id fragment still resolves."""
        grafico_factory.write_model()
        grafico_factory.add_folder("business", "id-business", type="business")
        grafico_factory.add_folder("other", "id-other", type="other")
        grafico_factory.add_element("other", "BusinessActor", "id-b", "Bob")
        grafico_factory.add_element("business", "BusinessActor", "id-a", "Alice",
                                    refs=[("assigned", href("business/BusinessActor_id-b.xml", "id-b"))])

        importer = GraficoModelImporter(grafico_factory.repo)
        model = importer.import_as_model()
        assert model.get_object_by_id("id-a").targets() == [model.get_object_by_id("id-b")]
        assert importer.get_unresolved_objects() is None


class TestUnresolved:

    def test_missing_target_collected(self, grafico_factory):
        paths = grafico_factory.create_two_element_model()
        grafico_factory.remove(paths["b"])

        importer = GraficoModelImporter(grafico_factory.repo)
        model = importer.import_as_model()
        unresolved = importer.get_unresolved_objects()

        assert model.get_object_by_id("id-b") is None
        assert len(unresolved) == 2  # From Alice and from the view
        assert {u.parent_object.id for u in unresolved} == {"id-a", "id-view"}
        assert all(u.missing_object_id == "id-b" for u in unresolved)
        assert all(u.missing_file_name == "b.xml" for u in unresolved)

    def test_unresolved_reference_dropped_from_element(self, grafico_factory):
        paths = grafico_factory.create_two_element_model()
        grafico_factory.remove(paths["b"])

        model = GraficoModelImporter(grafico_factory.repo).import_as_model()
        view = model.get_object_by_id("id-view")
        assert [t.id for t in view.targets()] == ["id-a"]

    def test_unresolved_object_uri_parts(self):
        unresolved = UnresolvedObject("business/sub/b.xml#id-b", parent_object=None)
        assert unresolved.missing_file_name == "b.xml"
        assert unresolved.missing_object_id == "id-b"

    def test_search_name_for_element(self):
        assert UnresolvedObject("business/b.xml#id-b", parent_object=None).search_name == "b.xml"

    def test_search_name_for_folder_keeps_directory(self):
        unresolved = UnresolvedObject("business/id-sub/folder.xml#id-sub", parent_object=None)
        assert unresolved.search_name == "id-sub/folder.xml"

    def test_split_href(self):
        assert split_href("a/b.xml#id-1") == ("a/b.xml", "id-1")
        assert split_href("a/b.xml") == ("a/b.xml", "")


class TestRepeatedImport:

    def test_new_instances_each_import(self, grafico_factory):
        grafico_factory.create_two_element_model()
        importer = GraficoModelImporter(grafico_factory.repo)

        first = importer.import_as_model()
        second = importer.import_as_model()
        assert first is not second
        assert first.get_object_by_id("id-a") is not second.get_object_by_id("id-a")
        assert first.fingerprint() == second.fingerprint()

    def test_unresolved_reset_between_imports(self, grafico_factory):
        paths = grafico_factory.create_two_element_model()
        content = grafico_factory.read(paths["b"])
        grafico_factory.remove(paths["b"])

        importer = GraficoModelImporter(grafico_factory.repo)
        importer.import_as_model()
        assert importer.get_unresolved_objects() is not None

        (grafico_factory.model_dir / paths["b"]).write_bytes(content)
        importer.import_as_model()
        assert importer.get_unresolved_objects() is None


class TestErrors:

    def test_malformed_xml(self, grafico_factory):
        grafico_factory.write_model()
        grafico_factory.add_folder("business", "id-business", type="business")
        (grafico_factory.model_dir / "business" / "broken.xml").write_text("<element kind=")

        with pytest.raises(GraficoError, match="Malformed"):
            GraficoModelImporter(grafico_factory.repo).import_as_model()

    def test_duplicate_identifier(self, grafico_factory):
        grafico_factory.write_model()
        grafico_factory.add_folder("business", "id-business", type="business")
        grafico_factory.add_element("business", "BusinessActor", "id-a", "Alice")
        grafico_factory.add_element("business", "BusinessActor", "id-a", "Alice copy", file_name="copy.xml")

        with pytest.raises(GraficoError, match="Duplicate"):
            GraficoModelImporter(grafico_factory.repo).import_as_model()

    def test_missing_identifier(self, grafico_factory):
        grafico_factory.write_model()
        grafico_factory.add_folder("business", "id-business", type="business")
        (grafico_factory.model_dir / "business" / "x.xml").write_text('<element kind="BusinessActor"/>')

        with pytest.raises(GraficoError, match="Missing identifier"):
            GraficoModelImporter(grafico_factory.repo).import_as_model()

    def test_wrong_root(self, grafico_factory):
        grafico_factory.model_dir.mkdir(parents=True)
        (grafico_factory.model_dir / "folder.xml").write_text('<folder id="x"/>')

        with pytest.raises(GraficoError):
            GraficoModelImporter(grafico_factory.repo).import_as_model()

    def test_grafico_error_is_os_error(self):
        assert issubclass(GraficoError, OSError)

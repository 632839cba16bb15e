"""
Tests for EditorManager and EditorStatePreserver

These tests validate:
- Only viewable elements open in an editor
- Editors are closed per model
- Capture/restore rebinds editors to a reloaded model by id
- Editor failures are logged, never raised
"""

import logging

import pytest

from modelrepo.core.model import Model, Folder, Element
from modelrepo.grafico.editors import EditorStatePreserver
from modelrepo.host.editors import EditorManager, EditorReference, EditorError


def model_with_views(*view_ids):
    model = Model(name="Views")
    folder = model.add_folder(Folder(id=f"id-views-{id(model)}", type="diagrams"))
    for view_id in view_ids:
        folder.add(Element(kind="DiagramModel", id=view_id, name=view_id))
    folder.add(Element(kind="BusinessActor", id="id-actor"))
    return model


class TestEditorManager:

    def test_open_viewable(self, editors):
        model = model_with_views("id-v1")
        ref = editors.open_diagram_editor(model.get_object_by_id("id-v1"))
        assert editors.editor_references() == [ref]

    def test_open_twice_returns_same_editor(self, editors):
        view = model_with_views("id-v1").get_object_by_id("id-v1")
        assert editors.open_diagram_editor(view) is editors.open_diagram_editor(view)

    def test_non_viewable_raises(self, editors):
        actor = model_with_views().get_object_by_id("id-actor")
        with pytest.raises(EditorError):
            editors.open_diagram_editor(actor)

    def test_close_editors_for_model(self, editors):
        first = model_with_views("id-v1", "id-v2")
        second = model_with_views("id-v3")
        for model, view_id in ((first, "id-v1"), (first, "id-v2"), (second, "id-v3")):
            editors.open_diagram_editor(model.get_object_by_id(view_id))

        assert editors.close_editors_for(first) == 2
        assert [r.diagram.id for r in editors.editor_references()] == ["id-v3"]

    def test_close_editor(self, editors):
        ref = editors.open_diagram_editor(model_with_views("id-v1").get_object_by_id("id-v1"))
        editors.close_editor(ref)
        assert editors.editor_references() == []

    def test_reference_without_input(self):
        with pytest.raises(EditorError):
            EditorReference(diagram=None).get_diagram()


class TestEditorStatePreserver:

    def test_capture_only_this_model(self, editors):
        first = model_with_views("id-v1")
        second = model_with_views("id-v2")
        editors.open_diagram_editor(first.get_object_by_id("id-v1"))
        editors.open_diagram_editor(second.get_object_by_id("id-v2"))

        assert EditorStatePreserver(editors).capture(first) == ["id-v1"]

    def test_restore_binds_new_instances(self, editors):
        old = model_with_views("id-v1", "id-v2")
        new = model_with_views("id-v1", "id-v2")
        preserver = EditorStatePreserver(editors)
        editors.open_diagram_editor(old.get_object_by_id("id-v2"))

        ids = preserver.capture(old)
        editors.close_editors_for(old)
        reopened = preserver.restore(new, ids)

        assert [r.diagram for r in reopened] == [new.get_object_by_id("id-v2")]

    def test_restore_skips_missing_and_non_viewable(self, editors):
        model = model_with_views("id-v1")
        reopened = EditorStatePreserver(editors).restore(model, ["id-gone", "id-actor", "id-v1"])
        assert [r.diagram.id for r in reopened] == ["id-v1"]

    def test_restore_none(self, editors):
        assert EditorStatePreserver(editors).restore(model_with_views(), None) == []

    def test_broken_editor_skipped_on_capture(self, editors, caplog):
        model = model_with_views("id-v1")
        editors.open_diagram_editor(model.get_object_by_id("id-v1"))
        editors._editors.append(EditorReference(diagram=None))

        with caplog.at_level(logging.WARNING):
            ids = EditorStatePreserver(editors).capture(model)

        assert ids == ["id-v1"]
        assert "Skipping editor" in caplog.text

    def test_open_failure_logged(self, caplog):
        class FailingEditors(EditorManager):
            def open_diagram_editor(self, diagram):
                raise EditorError("no display")

        model = model_with_views("id-v1")
        with caplog.at_level(logging.WARNING):
            reopened = EditorStatePreserver(FailingEditors()).restore(model, ["id-v1"])

        assert reopened == []
        assert "no display" in caplog.text

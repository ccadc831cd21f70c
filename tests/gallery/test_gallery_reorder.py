import pytest
from unittest.mock import Mock

from src.content.errors import GalleryError
from src.content.gallery.types import GalleryImage, DragEndEvent
from src.content.gallery.reorder import (
    GalleryReorderController,
    append_pending,
    array_move,
    clear_feature,
    feature_image,
    mark_uploaded,
    move,
    normalize,
    remove,
    renumber,
    reorder,
    set_feature,
)


def make_gallery(*ids, feature=None):
    return [
        GalleryImage(id=image_id, image_url=f"https://utfs.io/f/{image_id}.jpg", display_order=i + 1, is_feature=(image_id == feature), owner_id=1)
        for i, image_id in enumerate(ids)
    ]


def ids(images):
    return [img.id for img in images]


def orders(images):
    return [img.display_order for img in images]


class TestOrderingHelpers:
    """Test the low-level list helpers"""

    def test_array_move_forward_and_back(self):
        assert array_move(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]
        assert array_move(["a", "b", "c", "d"], 3, 0) == ["d", "a", "b", "c"]

    def test_array_move_does_not_touch_input(self):
        items = ["a", "b", "c"]
        array_move(items, 0, 2)
        assert items == ["a", "b", "c"]

    def test_renumber_is_one_based_and_dense(self):
        images = [GalleryImage(id=i, display_order=o) for i, o in [(1, 7), (2, 7), (3, 0)]]
        assert orders(renumber(images)) == [1, 2, 3]

    def test_normalize_sorts_by_stored_order(self):
        """
        Test: Loading a gallery whose stored orders are sparse and out of sequence
        How: Normalize images with orders 10, 2, 5
        Ensures: The list is sorted by stored order and renumbered 1..N
        """
        images = [
            GalleryImage(id="x", display_order=10),
            GalleryImage(id="y", display_order=2),
            GalleryImage(id="z", display_order=5),
        ]
        result = normalize(images)
        assert ids(result) == ["y", "z", "x"]
        assert orders(result) == [1, 2, 3]

    def test_normalize_treats_missing_order_as_zero_and_keeps_ties_stable(self):
        images = [
            GalleryImage(id="a", display_order=1),
            GalleryImage(id="b", display_order=None),
            GalleryImage(id="c", display_order=1),
        ]
        assert ids(normalize(images)) == ["b", "a", "c"]


class TestReorder:
    """Test drag-end handling"""

    def test_move_last_to_first(self):
        """
        Test: Dragging the last image onto the first one
        How: Apply a drag-end event from C onto A
        Ensures: Order becomes C, A, B with display orders 1, 2, 3
        """
        result = reorder(make_gallery("A", "B", "C"), DragEndEvent(active_id="C", over_id="A"))
        assert ids(result) == ["C", "A", "B"]
        assert orders(result) == [1, 2, 3]

    def test_move_first_to_last(self):
        result = reorder(make_gallery("A", "B", "C"), DragEndEvent(active_id="A", over_id="C"))
        assert ids(result) == ["B", "C", "A"]
        assert orders(result) == [1, 2, 3]

    def test_drop_outside_grid_changes_nothing(self):
        images = make_gallery("A", "B", "C")
        assert reorder(images, DragEndEvent(active_id="A", over_id=None)) == images

    def test_drop_onto_itself_changes_nothing(self):
        images = make_gallery("A", "B", "C")
        assert reorder(images, DragEndEvent(active_id="B", over_id="B")) == images

    def test_unknown_ids_are_ignored(self):
        images = make_gallery("A", "B")
        assert reorder(images, DragEndEvent(active_id="A", over_id="missing")) == images
        assert reorder(images, DragEndEvent(active_id="missing", over_id="A")) == images

    def test_single_image_gallery(self):
        images = make_gallery("only")
        assert reorder(images, DragEndEvent(active_id="only", over_id="only")) == images

    def test_input_is_not_mutated(self):
        images = make_gallery("A", "B", "C")
        reorder(images, DragEndEvent(active_id="C", over_id="A"))
        assert ids(images) == ["A", "B", "C"]
        assert orders(images) == [1, 2, 3]

    @pytest.mark.parametrize("old_index,new_index", [(0, 4), (4, 0), (1, 3), (3, 1), (2, 2)])
    def test_move_keeps_orders_dense(self, old_index, new_index):
        result = move(make_gallery(1, 2, 3, 4, 5), old_index, new_index)
        assert orders(result) == [1, 2, 3, 4, 5]
        assert sorted(ids(result)) == [1, 2, 3, 4, 5]

    def test_move_out_of_range_raises(self):
        with pytest.raises(GalleryError):
            move(make_gallery("A", "B"), 0, 2)
        with pytest.raises(GalleryError):
            move(make_gallery("A", "B"), -1, 0)

    def test_feature_flag_travels_with_image(self):
        result = reorder(make_gallery("A", "B", "C", feature="C"), DragEndEvent(active_id="C", over_id="A"))
        assert result[0].id == "C"
        assert result[0].is_feature


class TestFeatureImage:
    """Test feature image selection"""

    def test_set_feature_is_exclusive(self):
        """
        Test: Choosing a new feature image
        How: Set B as feature on a gallery where A already is
        Ensures: Exactly one image is flagged afterwards
        """
        result = set_feature(make_gallery("A", "B", "C", feature="A"), "B")
        assert [img.is_feature for img in result] == [False, True, False]
        assert feature_image(result).id == "B"

    def test_set_feature_unknown_image_raises(self):
        with pytest.raises(GalleryError):
            set_feature(make_gallery("A"), "Z")

    def test_clear_feature(self):
        result = clear_feature(make_gallery("A", "B", feature="B"))
        assert feature_image(result) is None

    def test_set_feature_does_not_reorder(self):
        result = set_feature(make_gallery("A", "B", "C"), "C")
        assert ids(result) == ["A", "B", "C"]
        assert orders(result) == [1, 2, 3]


class TestPendingUploads:
    """Test adding, removing and completing images that are still uploading"""

    def test_append_pending_goes_to_the_end(self):
        result = append_pending(make_gallery(1, 2), ["site.jpg", "roof.jpg"], ["Site", "Roof"])
        assert ids(result)[:2] == [1, 2]
        assert all(img.is_pending for img in result[2:])
        assert [img.caption for img in result[2:]] == ["Site", "Roof"]
        assert orders(result) == [1, 2, 3, 4]

    def test_pending_ids_are_unique(self):
        first = append_pending([], ["a.jpg"])
        second = append_pending(first, ["b.jpg", "c.jpg"])
        assert len(set(ids(second))) == 3
        assert all(str(i).startswith("pending-") for i in ids(second))

    def test_pending_images_can_be_reordered(self):
        images = append_pending(make_gallery(1, 2), ["new.jpg"])
        pending_id = images[-1].id
        result = reorder(images, DragEndEvent(active_id=pending_id, over_id=1))
        assert result[0].id == pending_id
        assert orders(result) == [1, 2, 3]

    def test_remove_renumbers(self):
        result = remove(make_gallery("A", "B", "C"), "B")
        assert ids(result) == ["A", "C"]
        assert orders(result) == [1, 2]

    def test_remove_unknown_raises(self):
        with pytest.raises(GalleryError):
            remove(make_gallery("A"), "B")

    def test_mark_uploaded_keeps_position(self):
        images = append_pending(make_gallery(1), ["new.jpg"])
        local_id = images[1].id
        result = mark_uploaded(images, local_id, "https://utfs.io/f/new.jpg", persisted_id=42)
        assert ids(result) == [1, 42]
        assert result[1].uploaded
        assert result[1].pending_file is None
        assert result[1].display_order == 2


class TestGalleryReorderController:
    """Test the stateful controller used by the editing form"""

    def test_initial_images_are_normalized(self):
        controller = GalleryReorderController([
            GalleryImage(id="b", display_order=5),
            GalleryImage(id="a", display_order=2),
        ])
        assert ids(controller.images) == ["a", "b"]
        assert orders(controller.images) == [1, 2]

    def test_drag_notifies_with_full_list(self):
        """
        Test: A drag that changes order reaches the caller
        How: Handle a drag-end event with a Mock on_change
        Ensures: on_change is called once with the complete reordered list
        """
        on_change = Mock()
        controller = GalleryReorderController(make_gallery("A", "B", "C"), on_change=on_change)

        controller.handle_drag_end(DragEndEvent(active_id="C", over_id="A"))

        on_change.assert_called_once()
        updated = on_change.call_args[0][0]
        assert ids(updated) == ["C", "A", "B"]
        assert orders(updated) == [1, 2, 3]

    def test_noop_drag_does_not_notify(self):
        on_change = Mock()
        controller = GalleryReorderController(make_gallery("A", "B"), on_change=on_change)

        controller.handle_drag_end(DragEndEvent(active_id="A", over_id="A"))
        controller.handle_drag_end(DragEndEvent(active_id="A", over_id=None))

        on_change.assert_not_called()

    def test_setting_same_feature_twice_notifies_once(self):
        on_change = Mock()
        controller = GalleryReorderController(make_gallery("A", "B"), on_change=on_change)

        controller.set_feature("B")
        controller.set_feature("B")

        assert on_change.call_count == 1
        assert controller.feature.id == "B"

    def test_returned_list_is_a_copy(self):
        controller = GalleryReorderController(make_gallery("A", "B"))
        controller.images.clear()
        assert len(controller.images) == 2

    def test_full_editing_session(self):
        on_change = Mock()
        controller = GalleryReorderController(make_gallery(1, 2), on_change=on_change)

        controller.add_pending(["new.jpg"])
        pending_id = controller.images[-1].id
        controller.move(2, 0)
        controller.mark_uploaded(pending_id, "https://utfs.io/f/new.jpg", persisted_id=3)
        controller.update_caption(3, "Front elevation")
        controller.set_feature(3)
        controller.remove(1)

        final = controller.images
        assert ids(final) == [3, 2]
        assert orders(final) == [1, 2]
        assert final[0].caption == "Front elevation"
        assert sum(img.is_feature for img in final) == 1
        assert on_change.call_count == 6

    def test_update_caption_unknown_image_raises(self):
        controller = GalleryReorderController(make_gallery("A"))
        with pytest.raises(GalleryError):
            controller.update_caption("Z", "nope")

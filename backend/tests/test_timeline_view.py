"""Tests for timeline layout geometry and placeholders."""

from src.schemas.timeline import MediaAsset
from src.services.playback_controller import PlaybackController
from src.services.timeline_model import MediaPool, TimelineModel
from src.services.timeline_view import TimelineView


def test_clip_box_geometry_scales_with_zoom(make_clip):
    view = TimelineView()
    clip = make_clip("a", start=2.0, duration=3.0)

    assert (view.layout_clip(clip, 100).left_px, view.layout_clip(clip, 100).width_px) == (100, 150)
    assert (view.layout_clip(clip, 200).left_px, view.layout_clip(clip, 200).width_px) == (200, 300)


def test_empty_render_shows_placeholders():
    layout = TimelineView().render(TimelineModel(), MediaPool(), PlaybackController(), 100)

    assert [row.track_id for row in layout.rows] == ["video-1", "audio-1", "audio-2", "effects-1"]
    assert layout.clip_count_label == "0 clips"
    assert layout.media_pool_placeholder == "No clips yet"
    assert layout.preview_placeholder == "Select a clip to preview"
    assert layout.timecode == "00:00:00.000"
    assert layout.pixels_per_second == 50


def test_locked_row_is_not_editable():
    model = TimelineModel()
    model.set_track_flag("audio-1", "locked", True)

    layout = TimelineView().render(model, MediaPool(), PlaybackController(), 100)
    rows = {row.track_id: row for row in layout.rows}

    assert not rows["audio-1"].editable
    assert rows["video-1"].editable


def test_media_pool_items_list_duration():
    pool = MediaPool()
    pool.upsert(MediaAsset(id="video-1", name="Generated Video 1", duration=5.0, url="https://x/1.mp4"))

    layout = TimelineView().render(TimelineModel(), pool, PlaybackController(), 100)

    assert layout.media_pool_placeholder is None
    item = layout.media_pool[0]
    assert (item.asset_id, item.duration_label) == ("video-1", "00:00:05.000")

"""Subtitle editor: captions, cue boundary and the orchestration service."""

from subtitler.editor.facade import SubtitleEditor
from subtitler.editor.models import Caption
from subtitler.editor.schemas import (
    CueListModel,
    CueModel,
    ItemModel,
    PendingPreviewModel,
    RegionModel,
    RenderSnapshot,
)
from subtitler.editor.service import EditorService, MediaElement

__all__ = [
    "Caption",
    "CueListModel",
    "CueModel",
    "EditorService",
    "ItemModel",
    "MediaElement",
    "PendingPreviewModel",
    "RegionModel",
    "RenderSnapshot",
    "SubtitleEditor",
]

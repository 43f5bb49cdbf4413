"""Video acquisition and playback."""

from jump_marker.media.playback import PlaybackSurface, VideoPlayback
from jump_marker.media.source import MediaHandle, open_video_file, record_camera_clip

__all__ = [
    "PlaybackSurface",
    "VideoPlayback",
    "MediaHandle",
    "open_video_file",
    "record_camera_clip",
]

"""Media processing node types: sources, filters and sinks.

Connector scopes used here: ``image``, ``video``, ``audio`` and ``ctrl``
(control values). A connector listing several scopes accepts any of them.
"""
from ..engine.connector import ConnectorConfig
from .base import BaseNodeType
from .registry import NodeRegistry


@NodeRegistry.register("ImageSource")
class ImageSourceNode(BaseNodeType):
    CATEGORY = "Sources"
    DISPLAY_NAME = "Image Source"
    DESCRIPTION = "Emit a still image"
    COLOR = "#1a3a5c"

    @classmethod
    def INPUTS(cls):
        return []

    @classmethod
    def OUTPUTS(cls):
        return [ConnectorConfig("out", ["image"], "Image")]


@NodeRegistry.register("VideoSource")
class VideoSourceNode(BaseNodeType):
    CATEGORY = "Sources"
    DISPLAY_NAME = "Video Source"
    DESCRIPTION = "Emit a video stream and its soundtrack"
    COLOR = "#1a3a5c"

    @classmethod
    def INPUTS(cls):
        return []

    @classmethod
    def OUTPUTS(cls):
        return [
            ConnectorConfig("video", ["video"], "Video"),
            ConnectorConfig("audio", ["audio"], "Audio"),
        ]


@NodeRegistry.register("Control")
class ControlNode(BaseNodeType):
    CATEGORY = "Sources"
    DISPLAY_NAME = "Control"
    DESCRIPTION = "Emit a control value"
    COLOR = "#2a3a1c"

    @classmethod
    def INPUTS(cls):
        return []

    @classmethod
    def OUTPUTS(cls):
        return [ConnectorConfig("value", ["ctrl"], "Value")]


@NodeRegistry.register("Blend")
class BlendNode(BaseNodeType):
    CATEGORY = "Filters"
    DISPLAY_NAME = "Blend"
    DESCRIPTION = "Blend two images using a control value as the mix factor"

    @classmethod
    def INPUTS(cls):
        return [
            ConnectorConfig("in-1", ["image"], "Image A"),
            ConnectorConfig("in-2", ["image"], "Image B"),
            ConnectorConfig("mix", ["ctrl"], "Mix"),
        ]

    @classmethod
    def OUTPUTS(cls):
        return [ConnectorConfig("out", ["image"], "Image")]


@NodeRegistry.register("FrameGrab")
class FrameGrabNode(BaseNodeType):
    CATEGORY = "Filters"
    DISPLAY_NAME = "Frame Grab"
    DESCRIPTION = "Extract the current frame of a video as an image"

    @classmethod
    def INPUTS(cls):
        return [ConnectorConfig("in", ["video"], "Video")]

    @classmethod
    def OUTPUTS(cls):
        return [ConnectorConfig("out", ["image", "video"], "Frame")]


@NodeRegistry.register("Gain")
class GainNode(BaseNodeType):
    CATEGORY = "Filters"
    DISPLAY_NAME = "Gain"
    DESCRIPTION = "Scale an audio signal"

    @classmethod
    def INPUTS(cls):
        return [
            ConnectorConfig("in", ["audio"], "Audio"),
            ConnectorConfig("level", ["ctrl"], "Level"),
        ]

    @classmethod
    def OUTPUTS(cls):
        return [ConnectorConfig("out", ["audio"], "Audio")]


@NodeRegistry.register("Preview")
class PreviewNode(BaseNodeType):
    CATEGORY = "Sinks"
    DISPLAY_NAME = "Preview"
    DESCRIPTION = "Show an image or video"
    COLOR = "#0d2a1a"

    @classmethod
    def INPUTS(cls):
        return [ConnectorConfig("in", ["image", "video"], "Picture")]

    @classmethod
    def OUTPUTS(cls):
        return []


@NodeRegistry.register("Output")
class OutputNode(BaseNodeType):
    CATEGORY = "Sinks"
    DISPLAY_NAME = "Output"
    DESCRIPTION = "Terminal sink of the diagram; cannot be removed"
    COLOR = "#0d2a1a"
    CAN_REMOVE = False

    @classmethod
    def INPUTS(cls):
        return [
            ConnectorConfig("video", ["video", "image"], "Video"),
            ConnectorConfig("audio", ["audio"], "Audio"),
        ]

    @classmethod
    def OUTPUTS(cls):
        return []

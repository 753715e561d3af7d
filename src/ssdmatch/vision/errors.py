"""Input-validation errors raised by the vision core.

All of them are deterministic caller errors detected before any parallel work
starts; none is worth retrying.
"""


class MatchError(ValueError):
    """Base class for template matching input errors."""


class InvalidChannelCount(MatchError):
    """A buffer has a channel count the operation does not accept."""

    def __init__(self, channels: int, allowed=(3, 4)):
        self.channels = channels
        self.allowed = tuple(allowed)
        super().__init__(f"Unsupported channel count {channels}; expected one of {self.allowed}")


class TemplateLargerThanScene(MatchError):
    """The template does not fit inside the scene in at least one dimension."""

    def __init__(self, template_size, scene_size):
        self.template_size = tuple(template_size)
        self.scene_size = tuple(scene_size)
        tw, th = self.template_size
        sw, sh = self.scene_size
        super().__init__(f"Template {tw}x{th} is larger than scene {sw}x{sh}")


class DimensionMismatch(MatchError):
    """Buffer metadata, offsets or rectangles disagree with the actual dimensions."""

import logging
from ..models.device import Orientation

logger = logging.getLogger(__name__)


class RotationService:
    """
    Suggests rotating the device when the puzzle image would fill more of
    the screen the other way round.  Aspect values here are width / height.
    """

    @staticmethod
    def occupation_percentage(screen_width: float, screen_height: float,
                              app_bar_height: float, image_aspect: float) -> float:
        """
        Percentage (0-100) of the area below the app bar covered by an
        aspect-fit image.
        """
        available_height = screen_height - app_bar_height
        if screen_width <= 0 or available_height <= 0 or image_aspect <= 0:
            return 0.0
        available_area = screen_width * available_height

        if image_aspect > screen_width / available_height:
            image_width = screen_width
            image_height = screen_width / image_aspect
        else:
            image_height = available_height
            image_width = available_height * image_aspect

        return (image_width * image_height) / available_area * 100

    @staticmethod
    def should_suggest_rotation(orientation: Orientation, image_aspect: float) -> bool:
        if orientation == Orientation.PORTRAIT and image_aspect > 1.0:
            reason = "portrait screen with landscape image"
            suggest = True
        elif orientation == Orientation.LANDSCAPE and image_aspect < 1.0:
            reason = "landscape screen with portrait image"
            suggest = True
        else:
            reason = "orientation and image already match"
            suggest = False

        logger.debug(f"Rotation check (aspect={image_aspect:.2f}, {orientation.value}): {reason}")
        return suggest

    def rotation_gain(self, screen_width: float, screen_height: float,
                      app_bar_height: float, image_aspect: float) -> float:
        current = self.occupation_percentage(screen_width, screen_height, app_bar_height, image_aspect)
        rotated = self.occupation_percentage(screen_height, screen_width, app_bar_height, image_aspect)
        return rotated - current

    @staticmethod
    def format_gain_message(gain: float) -> str:
        if gain <= 0:
            return ""
        if gain < 10:
            return f"Modest gain of {gain:.1f}%"
        if gain < 25:
            return f"Significant gain of {gain:.1f}%"
        return f"Large gain of {gain:.1f}%"

from shapebridge.adapters.shapes.client import NO_RESPONSE, ShapesAPIError, ShapesClient

__all__ = ["NO_RESPONSE", "ShapesAPIError", "ShapesClient"]

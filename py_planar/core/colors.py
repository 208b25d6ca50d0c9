"""Face fill colors and hover highlight ramps."""

import colorsys

HOVER_HUE = 122


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """
    Convert HSL (hue in degrees, saturation/lightness in percent) to #rrggbb.
    """
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360.0, lightness / 100.0, saturation / 100.0)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))


def generate_face_color(rng) -> str:
    """Random saturated mid-lightness color for a face fill."""
    hue = int(rng.random() * 360)
    saturation = 75 + rng.random() * 20
    lightness = 48 + rng.random() * 12
    return hsl_to_hex(hue, saturation, lightness)


def _layer_ratio(total_layers: int, layer_index: int) -> float:
    return layer_index / (total_layers - 1)


def hover_layer_color(total_layers: int, layer_index: int) -> str:
    """Highlight color for a shell layer; darkens with distance from the hovered face."""
    if total_layers <= 1:
        return hsl_to_hex(HOVER_HUE, 75, 80)

    ratio = _layer_ratio(total_layers, layer_index)
    return hsl_to_hex(HOVER_HUE, 70 + ratio * 25, 80 - ratio * 55)


def hover_layer_alpha(total_layers: int, layer_index: int) -> float:
    """Highlight opacity for a shell layer; fades from 0.9 to 0.4."""
    if total_layers <= 1:
        return 0.9

    return 0.9 - _layer_ratio(total_layers, layer_index) * 0.5

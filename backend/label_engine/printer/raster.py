"""Monochrome conversion for label rasters handed to print sinks."""
from PIL import Image

THRESHOLD = 128


def flatten(image: Image.Image) -> Image.Image:
    """Return ``image`` as RGB, compositing any transparency onto white."""
    if image.mode == "P":
        image = image.convert("RGBA")
    if image.mode in ("LA", "RGBA"):
        bg = Image.new("RGB", image.size, "white")
        bg.paste(image, mask=image.getchannel("A"))  # use alpha as mask
        return bg
    if image.mode in ("1", "L", "RGB"):
        return image
    raise AttributeError(f"Unsupported color space: {image.mode}")


def to_monochrome(image: Image.Image, threshold: int = THRESHOLD) -> Image.Image:
    """Threshold to 1-bit: dark pixel (< threshold) = black, everything else white."""
    flat = flatten(image)
    if flat.mode == "1":
        mono = flat.copy()
    else:
        gray = flat.convert("L")
        mono = gray.point(lambda x: 0 if x < threshold else 0xFF).convert("1", dither=Image.Dither.NONE)
    mono.info["dpi"] = image.info.get("dpi", (300, 300))
    return mono

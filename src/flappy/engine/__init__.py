"""Host runtime: sprites, physics, assets, fonts, input and the pygame window."""

from flappy.engine.sprites import Body, Sprite, TileSprite, DisplayList
from flappy.engine.physics import ArcadePhysics, overlaps
from flappy.engine.assets import AssetRegistry, Texture
from flappy.engine.fonts import FontFace, FontLoader
from flappy.engine.input import KeyInput, PointerInput
from flappy.engine.text import TextElement, TextStyle
from flappy.engine.displays import TextDisplay, ScoreLabel

__all__ = [
    "Body",
    "Sprite",
    "TileSprite",
    "DisplayList",
    "ArcadePhysics",
    "overlaps",
    "AssetRegistry",
    "Texture",
    "FontFace",
    "FontLoader",
    "KeyInput",
    "PointerInput",
    "TextElement",
    "TextStyle",
    "TextDisplay",
    "ScoreLabel",
]

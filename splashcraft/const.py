"""Constants for the splashcraft asset generator."""

AUTHOR = "SplashCraft"

# Platform tokens accepted in a generation request
PLATFORM_ANDROID = "android"
PLATFORM_IOS = "ios"
PLATFORM_WEB = "web"
PLATFORM_ANDROID_TV = "androidTV"
PLATFORM_PLAY_STORE = "playStore"
PLATFORM_TVOS = "tvOS"
PLATFORM_MACOS = "macOS"
PLATFORM_WATCHOS = "watchOS"
PLATFORM_SPLASH = "splash"
PLATFORMS = (
    PLATFORM_ANDROID,
    PLATFORM_IOS,
    PLATFORM_WEB,
    PLATFORM_ANDROID_TV,
    PLATFORM_PLAY_STORE,
    PLATFORM_TVOS,
    PLATFORM_MACOS,
    PLATFORM_WATCHOS,
    PLATFORM_SPLASH,
)

SOURCE_TYPES = ("icon", "clipart", "text", "image")
SCALING_MODES = ("center", "crop", "mask")
EFFECTS = ("none", "padding")
BACKGROUND_TYPES = ("color", "gradient", "mesh", "image", "texture", "none")
ADAPTIVE_BACKGROUND_TYPES = ("color", "gradient", "image")
SPLASH_BACKGROUND_TYPES = ("color", "gradient", "image")
SHAPES = ("square", "squircle", "circle", "themed")
GRADIENT_DIRECTIONS = (
    "to-b",
    "to-t",
    "to-r",
    "to-l",
    "to-br",
    "to-bl",
    "to-tr",
    "to-tl",
)
TEXTURES = ("noise", "dots", "lines", "grid", "waves")
SPLASH_CONTENT_TYPES = ("logo", "text", "logo-text")
SPLASH_POSITIONS = ("top", "center", "bottom")
FRAMEWORKS = ("capacitor", "flutter", "react-native", "native")

DEFAULT_FILENAME = "ic_launcher"
DEFAULT_ICON_BACKGROUND = "#3B82F6"
WHITE = "#FFFFFF"

# Rasterizer geometry, all relative to the canvas size
SQUIRCLE_RADIUS = 0.22
BADGE_DIAMETER = 0.25
BADGE_MARGIN = 0.05
CONTENT_GLYPH_RATIO = 0.6
MESH_RADIUS = 0.8
MESH_CENTER_ALPHA = 0x80
TEXTURE_NOISE_AMPLITUDE = 10
MONOCHROME_DEFAULT_PADDING = 0.15
BANNER_CONTENT_RATIO = 0.6
MASK_SUPERSAMPLE = 4
# Supersampled masks never exceed this many pixels per side
MASK_MAX_SIDE = 8192
# Smooth gradients are computed at most this large and then upscaled
GRADIENT_MAX_SIDE = 1024

# Splash layout
SPLASH_SCALES = {"small": 0.25, "medium": 0.4, "large": 0.55}
SPLASH_ANCHORS = {"top": 0.3, "center": 0.5, "bottom": 0.7}
SPLASH_TEXT_RATIO = 0.08
SPLASH_TEXT_MAX = 48
SPLASH_LOGO_TEXT_GAP = 20

# Custom size bounds (pixels)
CUSTOM_SIZE_MIN = 1
CUSTOM_SIZE_MAX = 8192

# Stock glyph names offered by the designer's icon picker, in picker order
ICON_LIBRARY = (
    "Sparkles", "Star", "Heart", "Zap", "Flame", "Rocket", "Music", "Camera",
    "ShoppingCart", "MessageCircle", "Bell", "Settings", "Home", "User", "Mail",
    "Phone", "Calendar", "Clock", "Map", "Gift", "Bookmark", "Award", "Trophy",
    "Target", "Compass", "Sun", "Moon", "Cloud", "Umbrella", "Coffee", "Pizza",
    "Gamepad2", "Headphones", "Mic", "Video", "Image", "Palette", "Brush", "Pen",
    "Code", "Terminal", "Database", "Globe", "Wifi", "Battery", "Shield", "Lock",
    "Key", "CreditCard", "Wallet", "PiggyBank", "TrendingUp", "BarChart", "Activity",
    "Dumbbell", "Bike", "Car", "Plane", "Ship", "Train", "Bus", "Building",
)

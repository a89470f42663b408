from .service import Identity, NavAction, HeaderContext, avatar_initial, build_header

__all__ = ["Identity", "NavAction", "HeaderContext", "avatar_initial", "build_header"]

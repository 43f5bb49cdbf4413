"""User interface: presentation state, sharing, display window and HUD.

The OpenCV-backed modules (display, hud) are imported explicitly by the
CLI so the pure helpers stay usable without a display.
"""

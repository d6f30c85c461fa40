"""HTTP surface for the bundled front end.

- /config.js: runtime configuration as a script
- /assets/: content-hashed build output
- /skin-assets/: files from the active skin directory
- everything else: the skin layout (or the bundle's index.html in SPA modes)
"""

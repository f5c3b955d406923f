"""PYNCER UTILS test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/function (no real I/O).
- integration/  : Real interactions with the filesystem under ``tmp_path``.

General guidance
- Keep unit fast and deterministic; the URI engine and the path sanitizers
  are pure, so they never need a disk.
- Integration builds real trees, runs the tree engine against them and
  inspects the result on disk.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Markers: unit, integration, property, slow
"""

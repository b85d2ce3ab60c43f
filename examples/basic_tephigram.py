"""
Basic Tephigram Example

This example demonstrates the simplest workflow with the tephigram package:
build a diagram from the default parameters, overlay a sounding, read the
thermodynamic state at a few screen points, and open the interactive viewer.

Output: Text read-outs on stdout and an interactive matplotlib window.
"""

from pathlib import Path

from tephigram import (
    Config,
    Sounding,
    TephigramError,
    TephigramViewer,
    build_frame,
    read_cursor,
)

# ============================================================================
# Configuration
# ============================================================================

config_path = Path(__file__).with_name("diagram.yaml")
config = Config.load_from_file(config_path) if config_path.exists() else Config()
config.validate()

# A mid-latitude summer profile (kPa, degC)
sounding = Sounding(
    pressure=[100.0, 92.5, 85.0, 70.0, 50.0, 40.0, 30.0],
    temperature=[24.0, 19.5, 15.0, 5.5, -10.0, -21.0, -36.0],
    dewpoint=[17.0, 14.0, 9.0, -4.0, -25.0, -38.0, -50.0],
)

print("Building tephigram:")
print(f"  Temperature: {config.grid.temperature.min} to {config.grid.temperature.max} degC")
print(f"  Phi: {config.grid.phi.min} to {config.grid.phi.max} K")
print(f"  Shear angle: {config.grid.angle:.3f} rad")
print(f"  Isobars: {', '.join(f'{p:g}' for p in config.pressure_lines.pressures())} kPa")
print()

# ============================================================================
# Frame Assembly
# ============================================================================

try:
    frame = build_frame(config, sounding=sounding)

    print(f"Grid lines:  {len(frame.grid_lines)}")
    print(f"Isobars:     {len(frame.isobars)}")
    print(f"Vapor lines: {len(frame.vapor_lines)}")
    print(f"Labels:      {len(frame.labels)}")
    print()

    # Cursor read-outs along the plot diagonal
    for point in [(100.0, 500.0), (300.0, 300.0), (500.0, 100.0)]:
        print(f"Cursor at {point}:")
        for line in read_cursor(config, point).format().splitlines():
            print(f"  {line}")
        print()

except TephigramError as e:
    print(f"Error building tephigram: {e}")
    raise SystemExit(1)


# ============================================================================
# Interactive Display
# ============================================================================

print("Opening interactive viewer... (close window to exit)")
TephigramViewer(config, sounding=sounding).show()

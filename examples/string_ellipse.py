# examples/string_ellipse.py
# Walk the pen once around the ellipse and report how the rope copes.
import numpy as np
from rope_loop import StringDrawing

drawing = StringDrawing(string_length=8.0, focus_separation=4.0, restore_on_invalid=True)

a = 4.0
b = np.sqrt(a**2 - 2.0**2)
invalid = rolled_back = 0
for theta in np.linspace(0.0, 2 * np.pi, 73):
    # well inside the ellipse, where the rope has enough slack to follow
    pen = (0.4 * a * np.cos(theta), 0.4 * b * np.sin(theta))
    result = drawing.tick((-2.0, 0.0), (2.0, 0.0), pen)
    if not result.valid:
        invalid += 1
        print(f"theta={theta:.2f} pen escaped the rope")
    if result.restored:
        rolled_back += 1

print("ticks:", drawing.ticks)
print("invalid ticks:", invalid, "rolled back:", rolled_back)
print("trail points:", len(drawing.trail))
print("rope bbox:", drawing.loop.vertices().min(axis=0), drawing.loop.vertices().max(axis=0))

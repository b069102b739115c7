# examples/drag_rope.py
import logging

from rope_loop import StringDrawing
from rope_loop.renderer import DebugRenderer

logging.basicConfig(level=logging.DEBUG)

drawing = StringDrawing(n=80, restore_on_invalid=True)
renderer = DebugRenderer()

drawing.tick((-2.0, 0.0), (2.0, 0.0), (0.0, 0.0))
renderer.render_drawing(drawing)

# grab the rope near the top and pull it upwards
if drawing.select_at(drawing.loop.particles[20].position, 0.1):
    drawing.drag_selected((0.0, 2.5))
    drawing.release()
renderer.render_drawing(drawing)

# jump the pen far away; the string clamps it and the rope rolls back if needed
result = drawing.tick((-2.0, 0.0), (2.0, 0.0), (9.0, 9.0))
print("valid:", result.valid, "restored:", result.restored, "pen:", result.pen)
renderer.render_drawing(drawing)

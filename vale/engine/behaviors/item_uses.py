# vale/engine/behaviors/item_uses.py
"""Item-use behaviors - side effects for using a carried item."""
from ..systems.look_helpers import render_map
from .base import ActionBehavior, ActionContext, ActionResult, behavior


@behavior(
    name="render_map",
    description="Unfolds an overview of the vale with the player's room marked",
    defaults={"intro": "You unfold the map:"},
)
class RenderMap(ActionBehavior):
    def on_use(self, ctx: ActionContext) -> ActionResult:
        return ActionResult.done(f"{ctx.config['intro']}\n{render_map(ctx.world)}")

"""
Basic Tile Rendering Example

This example renders the hand-made feature document next to this script in
two ways: through the one-call API, and stage by stage (classify, fit,
composite) to show what each stage produces.

Output: output/basic_tile.png and output/staged_tile.png
"""

from pathlib import Path

from tile_renderer import Config, render_features_file
from tile_renderer.calculations import classify_features, compute_viewport, fit_scene
from tile_renderer.data import load_features
from tile_renderer.rendering import MatplotlibSurface, composite


HERE = Path(__file__).resolve().parent
OUTPUT_DIR = HERE.parent / "output"


def render_with_api(config: Config) -> str:
    return render_features_file(
        HERE / "sample_features.yaml",
        OUTPUT_DIR / "basic_tile.png",
        config,
    )


def render_staged(config: Config) -> str:
    features = load_features(HERE / "sample_features.yaml")

    scene = classify_features(features)
    for shape in scene.shapes:
        print(f"  {type(shape).__name__:<10} priority={shape.stack_priority:<3} points={len(shape.points)}")

    viewport = compute_viewport(scene.shapes, config.canvas_width, config.canvas_height)
    print(f"  viewport: min_x={viewport.min_x:.1f} min_y={viewport.min_y:.1f} scale={viewport.scale:.5f}")

    canvas_scene = fit_scene(scene, config.canvas_width, config.canvas_height, viewport)

    surface = MatplotlibSurface(
        config.canvas_width,
        config.canvas_height,
        dpi=config.default_dpi,
        background_color=config.background_color,
    )
    painted = composite(canvas_scene, surface)
    print(f"  painted {len(painted)} shapes with {surface.draw_calls} draw calls")

    path = surface.save(OUTPUT_DIR / "staged_tile.png")
    surface.close()
    return path


def main() -> None:
    config = Config(canvas_width=640, canvas_height=640, background_color="#f2efe9")
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    print("Rendering with render_features_file ...")
    print(f"  saved {render_with_api(config)}")

    print("Rendering stage by stage ...")
    print(f"  saved {render_staged(config)}")


if __name__ == "__main__":
    main()

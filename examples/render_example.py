"""Example with real-time rendering and live regeneration."""

from galaxy_gen import GalaxyInstance, GalaxyParameters
from galaxy_gen.animation import AnimationDriver, Clock, FrameContext
from galaxy_gen.controls import ControlPanel
from galaxy_gen.render import Camera, Renderer3D, Scene
from galaxy_gen.utils import make_rng, setup_logging

def main():
    """Animate a galaxy and change its parameters every few seconds."""
    setup_logging()
    rng = make_rng(123)
    
    scene = Scene()
    instance = GalaxyInstance(scene)
    panel = ControlPanel(GalaxyParameters(count=20000), lambda p: instance.regenerate(p, rng))
    instance.regenerate(panel.params, rng)
    
    renderer = Renderer3D(max_points=20000)
    context = FrameContext(renderer, scene, Camera(), instance, Clock())
    driver = AnimationDriver(context, fps=30)
    
    # Scripted tweaks: (frame, control, value)
    tweaks = [(90, "branches", 5), (180, "spin", -2.0), (270, "outside_color", "#ffffff")]
    
    def on_frame(ctx):
        for frame, name, value in tweaks:
            if driver.frame_count == frame:
                if name.endswith("_color"):
                    panel.set_color(name, value)
                else:
                    panel.set_value(name, value)
                    panel.finish_change(name)
    
    driver.on_frame = on_frame
    
    print("Animating galaxy...")
    print("Close the matplotlib window to stop.")
    
    try:
        driver.run()
    except KeyboardInterrupt:
        print("\nAnimation interrupted by user")
    finally:
        renderer.close()
        instance.dispose()
        print("Done!")

if __name__ == "__main__":
    main()

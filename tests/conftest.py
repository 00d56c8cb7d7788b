"""
Shared fixtures for Banner Layout Editor tests.

Provides reusable formats, elements, scenes and sample layout data.
"""
import sys
import os
import pytest

# Run Qt headless when no display is available
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))


# ── Sample layout (wire shape) ──────────────────────────────────────────

SAMPLE_LAYOUT = {
    "format": {"name": "Display Ad - Medium Rectangle", "width": 300, "height": 250},
    "elements": [
        {
            "id": "bg",
            "type": "artboard-background",
            "content": "#ffffff",
            "style": {"x": 0, "y": 0, "width": 300, "height": 250},
        },
        {
            "id": "hero",
            "type": "image",
            "content": "https://example.com/hero.png",
            "style": {"x": 0, "y": 0, "width": 300, "height": 150, "objectFit": "cover"},
        },
        {
            "id": "title",
            "type": "text",
            "content": "Summer Sale",
            "style": {"x": 20, "y": 160, "width": 260, "height": 40, "fontSize": 24},
            "_layerName": "Headline",
        },
        {
            "id": "box",
            "type": "container",
            "content": "",
            "columns": 1,
            "style": {"x": 20, "y": 200, "width": 260, "height": 40},
            "childElements": [
                {
                    "id": "cta",
                    "type": "button",
                    "content": "Shop now",
                    "link": "https://example.com",
                    "style": {"x": 0, "y": 0, "width": 120, "height": 40},
                    "inContainer": True,
                    "parentId": "box",
                },
            ],
        },
    ],
}


@pytest.fixture
def sample_layout():
    """Fresh copy of the sample layout dict"""
    import copy
    return copy.deepcopy(SAMPLE_LAYOUT)


@pytest.fixture
def square_format():
    from models.banner_size import BannerSize
    return BannerSize("Square", 100, 100)


@pytest.fixture
def wide_format():
    from models.banner_size import BannerSize
    return BannerSize("Wide", 200, 50)


@pytest.fixture
def fresh_scene():
    """Fresh empty Scene set as active"""
    from models.scene import Scene
    scene = Scene()
    Scene.set_active(scene)
    return scene


@pytest.fixture
def three_element_scene(fresh_scene):
    """Scene with three standalone text elements e0, e1, e2 (e2 on top)"""
    from models.element import create_element, TextContent
    for i in range(3):
        fresh_scene.insert_standalone(
            create_element('text', x=10 * i, y=10 * i, element_id=f"e{i}", content=TextContent(f"Text {i}"))
        )
    return fresh_scene


@pytest.fixture
def container_scene(fresh_scene):
    """Scene with a container 'c1' holding 'child1', plus standalone 'solo'"""
    from models.element import create_element
    container = create_element('container', x=50, y=50, width=200, height=150, element_id='c1')
    fresh_scene.insert_standalone(container)
    fresh_scene.insert_standalone(create_element('text', x=120, y=80, element_id='child1'))
    fresh_scene.reparent('child1', 'c1')
    fresh_scene.insert_standalone(create_element('image', x=300, y=300, width=100, height=50, element_id='solo'))
    return fresh_scene

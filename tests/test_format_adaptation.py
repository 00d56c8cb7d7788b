"""
Tests for format adaptation: whole-layout rescaling and per-format overrides
"""
import numpy as np
import pytest

from models.banner_size import BannerSize
from models.element import EditorElement, create_element
from models.errors import DegenerateFormat
from services.format_adaptation import (
    adapt, scale_geometry, scale_font_size, compute_format_style,
    copy_element_to_format, copy_element_to_all_formats,
    clear_format_specific_styles, has_format_specific_styles, rank_formats
)

PORTRAIT = BannerSize("Portrait", 100, 200)
LANDSCAPE = BannerSize("Landscape", 200, 100)


class TestScaleGeometry:

    def test_unlocked_rows_scale_per_axis(self):
        scaled = scale_geometry([[10, 10, 20, 20]], 2.0, 0.5, [False])
        np.testing.assert_allclose(scaled, [[20, 5, 40, 10]])

    def test_locked_rows_keep_ratio(self):
        scaled = scale_geometry([[0, 0, 100, 50]], 3.0, 0.1, [True])
        np.testing.assert_allclose(scaled, [[0, 0, 300, 150]])

    def test_locked_zero_height_row(self):
        scaled = scale_geometry([[0, 0, 100, 0]], 2.0, 2.0, [True])
        np.testing.assert_allclose(scaled, [[0, 0, 200, 0]])

    def test_font_size(self):
        assert scale_font_size(24, 2.0, 0.5) == 30
        assert scale_font_size(10, 0.5, 0.5) == 12


class TestAdapt:

    def test_square_to_wide(self, square_format, wide_format):
        text = create_element('text', x=10, y=10, width=20, height=20)
        result = adapt(square_format, [text], [wide_format])[0]
        assert result.ok
        assert result.elements[0].geometry.to_tuple() == (20, 5, 40, 10)
        assert result.elements[0].size_id == 'Wide'

    def test_image_keeps_aspect(self, square_format):
        image = create_element('image', width=100, height=50)
        target = BannerSize("Strip", 300, 10)
        adapted = adapt(square_format, [image], [target])[0].elements[0]
        assert (adapted.geometry.width, adapted.geometry.height) == (300, 150)

    def test_copies_have_fresh_ids(self, square_format, wide_format):
        box = create_element('container', element_id='box')
        child = create_element('text', element_id='kid')
        child.in_container, child.parent_id = True, 'box'
        box.child_elements.append(child)
        box.format_specific_styles['Wide'] = {'x': 1}

        adapted = adapt(square_format, [box], [wide_format])[0].elements[0]
        assert adapted.id != 'box'
        assert adapted.child_elements[0].id != 'kid'
        assert adapted.child_elements[0].parent_id == adapted.id
        assert adapted.child_elements[0].size_id == 'Wide'
        assert adapted.format_specific_styles == {}
        # Source untouched
        assert box.id == 'box' and box.format_specific_styles == {'Wide': {'x': 1}}

    def test_font_size_scaled(self, square_format, wide_format):
        text = create_element('text', font_size=24)
        adapted = adapt(square_format, [text], [wide_format])[0].elements[0]
        assert adapted.style.font_size == 30

    def test_degenerate_target_only_fails_itself(self, square_format, wide_format):
        results = adapt(square_format, [create_element('text')], [BannerSize("Zero", 0, 10), wide_format])
        assert not results[0].ok
        assert isinstance(results[0].error, DegenerateFormat)
        assert results[0].elements == []
        assert results[1].ok

    def test_degenerate_source_fails_all(self, wide_format):
        results = adapt(BannerSize("Flat", 100, 0), [create_element('text')], [wide_format, wide_format])
        assert [r.ok for r in results] == [False, False]

    def test_empty_layout(self, square_format, wide_format):
        assert adapt(square_format, [], [wide_format])[0].elements == []

    def test_sample_layout_to_story(self, sample_layout):
        source = BannerSize.from_dict(sample_layout['format'])
        elements = [EditorElement.from_dict(e) for e in sample_layout['elements']]
        story = BannerSize("Instagram Story", 1080, 1920)
        adapted = adapt(source, elements, [story])[0].elements
        assert len(adapted) == len(elements)
        background = adapted[0]
        assert background.geometry.width == pytest.approx(1080)
        assert background.geometry.height == pytest.approx(1920)


class TestFormatOverrides:

    def test_same_orientation_is_proportional(self):
        element = create_element('text', x=10, y=10, width=20, height=20)
        override = compute_format_style(element, BannerSize("S", 100, 100), BannerSize("L", 300, 300))
        assert override == {'x': 30, 'y': 30, 'width': 60, 'height': 60}

    def test_text_to_landscape_top_half_goes_left(self):
        element = create_element('text', x=0, y=20, width=80, height=20, font_size=20)
        override = compute_format_style(element, PORTRAIT, LANDSCAPE)
        assert override == {'x': 20, 'y': 30, 'width': 80, 'height': 40, 'fontSize': 25}

    def test_text_to_landscape_bottom_half_goes_right(self):
        element = create_element('text', x=0, y=150, width=80, height=20)
        override = compute_format_style(element, PORTRAIT, LANDSCAPE)
        assert (override['x'], override['y']) == (110, 30)

    def test_text_to_portrait_by_side(self):
        left = create_element('text', x=10, y=0, width=50, height=20)
        right = create_element('text', x=150, y=0, width=50, height=20)
        assert compute_format_style(left, LANDSCAPE, PORTRAIT)['y'] == 20
        assert compute_format_style(right, LANDSCAPE, PORTRAIT)['y'] == 140

    def test_button_to_landscape(self):
        element = create_element('button', x=10, y=150, width=80, height=30)
        override = compute_format_style(element, PORTRAIT, LANDSCAPE)
        assert override == {'x': 120, 'y': 60, 'width': 60, 'height': 15}

    def test_image_to_landscape(self):
        element = create_element('image', x=0, y=100, width=50, height=25)
        override = compute_format_style(element, PORTRAIT, LANDSCAPE)
        assert override == {'x': 30, 'y': 15, 'width': 140, 'height': 70}

    def test_background_covers_target(self):
        element = create_element('artboard-background', width=100, height=200)
        override = compute_format_style(element, PORTRAIT, LANDSCAPE)
        assert override == {'x': 0, 'y': 0, 'width': 200, 'height': 100}

    def test_copy_and_clear(self):
        element = create_element('text', x=10, y=10, width=20, height=20)
        copy_element_to_format(element, PORTRAIT, LANDSCAPE)
        assert has_format_specific_styles(element, 'Landscape')
        assert element.resolved_style('Landscape').x == 20

        assert clear_format_specific_styles(element, 'Landscape')
        assert not clear_format_specific_styles(element, 'Landscape')
        assert not has_format_specific_styles(element, 'Landscape')

    def test_copy_to_all_skips_source_and_degenerate(self):
        element = create_element('text')
        written = copy_element_to_all_formats(
            element, PORTRAIT, [PORTRAIT, LANDSCAPE, BannerSize("Zero", 0, 0)]
        )
        assert written == ['Landscape']
        assert set(element.format_specific_styles) == {'Landscape'}
        assert clear_format_specific_styles(element)
        assert element.format_specific_styles == {}

    def test_degenerate_raises(self):
        with pytest.raises(DegenerateFormat):
            compute_format_style(create_element('text'), PORTRAIT, BannerSize("Zero", 0, 50))


class TestRankFormats:

    def test_best_first(self):
        options = [LANDSCAPE, BannerSize("Tall", 100, 210), BannerSize("Zero", 0, 1)]
        ranked = rank_formats(PORTRAIT, options)
        assert [r['format'].name for r in ranked] == ['Tall', 'Landscape']
        assert ranked[0]['label'] == 'Very similar'

    def test_limit(self):
        ranked = rank_formats(PORTRAIT, [LANDSCAPE, PORTRAIT], limit=1)
        assert len(ranked) == 1
        assert ranked[0]['similarity'] == pytest.approx(1.0)

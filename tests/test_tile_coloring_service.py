"""Tests for single-tile coloring and resolution."""

import numpy as np
import pytest

from shapepaint.models.color import BLACK, WHITE
from shapepaint.models.color_allocator import ColorAllocator
from shapepaint.models.tile import Tile
from shapepaint.repositories.color_registry import ColorRegistry
from shapepaint.services.color_resolution_service import ColorResolutionService
from shapepaint.services.tile_coloring_service import TileColoringService


@pytest.fixture
def registry():
    return ColorRegistry()


@pytest.fixture
def colorer(registry):
    return TileColoringService(registry)


@pytest.fixture
def resolver(registry):
    return ColorResolutionService(registry, ColorAllocator(seed=0))


def _edge_tile(rows_to_pixels, rows):
    return Tile(0, 0, rows_to_pixels(rows))


def _color_and_resolve(colorer, resolver, tile):
    colorer.color(tile, seed_left_column=True, seed_top_row=True)
    resolver.resolve_tile(tile)
    return tile.packed()


def test_u_shape_collapses_to_one_color(colorer, resolver, registry, rows_to_pixels):
    tile = _edge_tile(rows_to_pixels, [
        "#.#",
        "#.#",
        "###",
    ])
    packed = _color_and_resolve(colorer, resolver, tile)

    colors = set(packed[packed != WHITE].tolist())
    assert len(colors) == 1
    assert colors.isdisjoint({WHITE, BLACK})
    assert registry.ncolors == 1


def test_blob_keeps_background_white(colorer, resolver, registry, rows_to_pixels, mask_of):
    rows = [
        "........",
        ".####...",
        ".#..#...",
        ".####.#.",
        "......#.",
        "...####.",
    ]
    tile = _edge_tile(rows_to_pixels, rows)
    marked = mask_of(tile.pixels)
    packed = _color_and_resolve(colorer, resolver, tile)

    assert (packed[~marked] == WHITE).all()
    assert len(set(packed[marked].tolist())) == 2
    assert registry.ncolors == 2


def test_isolated_pixels_get_distinct_colors(colorer, registry, rows_to_pixels):
    tile = _edge_tile(rows_to_pixels, [
        "....",
        ".#..",
        "...#",
    ])
    colorer.color(tile, seed_left_column=True, seed_top_row=True)
    packed = tile.packed()
    assert packed[1, 1] != packed[2, 3]
    assert BLACK not in packed.tolist()[1] + packed.tolist()[2]
    assert registry.ncolors == 2


def test_black_top_left_gets_fresh_color(colorer, registry, rows_to_pixels):
    tile = _edge_tile(rows_to_pixels, ["#"])
    colorer.color(tile, seed_left_column=True, seed_top_row=True)
    assert tile.packed()[0, 0] not in (WHITE, BLACK)
    assert registry.ncolors == 1


def test_white_top_left_is_left_alone(colorer, registry, rows_to_pixels):
    tile = _edge_tile(rows_to_pixels, [
        ".#",
        "#.",
    ])
    colorer.color(tile, seed_left_column=True, seed_top_row=True)
    packed = tile.packed()
    assert packed[0, 0] == WHITE
    assert packed[0, 1] != packed[1, 0]
    assert registry.ncolors == 2


def test_seeded_column_follows_previous_pixel(colorer, registry, rows_to_pixels):
    tile = _edge_tile(rows_to_pixels, ["#", "#", ".", "#"])
    colorer.color(tile, seed_left_column=True)
    packed = tile.packed()[:, 0]
    assert packed[0] == packed[1]
    assert packed[2] == WHITE
    assert packed[3] not in (packed[0], WHITE, BLACK)
    assert registry.ncolors == 2


def test_interior_inherits_overlap_colors(colorer, registry):
    # row 0 and column 0 already colored by neighbouring tiles
    a, b = registry.allocate(), registry.allocate()
    packed = np.array([
        [a, WHITE, b],
        [a, BLACK, BLACK],
    ], dtype=np.uint32)
    tile = Tile(3, 3, np.zeros((2, 3, 3), dtype=np.uint8))
    tile.set_packed(packed)

    colorer.color(tile)
    assert tile.packed().tolist() == [[a, WHITE, b], [a, a, b]]
    assert registry.resolve(a) == registry.resolve(b)
    assert registry.ncolors == 1


def test_empty_tile_is_untouched(colorer, resolver, registry):
    tile = Tile.empty(4, 4)
    assert colorer.color(tile, True, True) is tile
    assert resolver.resolve_tile(tile).is_empty
    assert registry.ncolors == 0


def test_resolve_passes_sentinels_through(resolver, registry):
    a, b = registry.allocate(), registry.allocate()
    registry.merge(a, b)
    tile = Tile(0, 0, np.zeros((1, 4, 3), dtype=np.uint8))
    tile.set_packed(np.array([[WHITE, BLACK, a, b]], dtype=np.uint32))

    resolver.resolve_tile(tile)
    shown = resolver.allocator.color_for(registry.resolve(a))
    assert tile.packed().tolist() == [[WHITE, BLACK, shown, shown]]


def test_resolver_keeps_the_given_allocator(registry):
    alloc = ColorAllocator(seed=7)
    resolver = ColorResolutionService(registry, alloc)
    assert resolver.allocator is alloc
    assert resolver.allocator.seed == 7


def test_labels_are_replaced_by_palette_colors(colorer, resolver, registry, rows_to_pixels):
    tile = _edge_tile(rows_to_pixels, [
        "#..",
        "..#",
    ])
    colorer.color(tile, seed_left_column=True, seed_top_row=True)
    labels = {int(tile.packed()[0, 0]), int(tile.packed()[1, 2])}
    resolver.resolve_tile(tile)

    packed = tile.packed()
    shown = {int(packed[0, 0]), int(packed[1, 2])}
    assert len(shown) == 2
    assert shown.isdisjoint(labels)
    assert shown == {resolver.allocator.color_for(label) for label in labels}

from scenekit.geometries import Box, LineGeometry, cube


def test_box_counts():
    box = Box(2.0, 4.0, 6.0)
    assert len(box.faces) == 12
    assert len(box.vertices) == 24
    assert len(box.uvs) == len(box.vertices)
    assert box.array_count() == 3 * len(box.faces)


def test_box_vertices_lie_on_corners():
    width, height, depth = 2.0, 4.0, 6.0
    box = Box(width, height, depth)
    for x, y, z in box.vertices:
        assert abs(x) == width / 2
        assert abs(y) == height / 2
        assert abs(z) == depth / 2


def test_box_faces_pair_up_on_flat_sides():
    box = Box(3.0, 5.0, 7.0)
    for first, second in zip(box.faces[0::2], box.faces[1::2]):
        points = [box.vertices[f.at(i)] for f in (first, second) for i in range(3)]
        flat_axes = [axis for axis in range(3) if len({p[axis] for p in points}) == 1]
        assert len(flat_axes) == 1


def test_box_uses_every_vertex():
    box = Box(1.0, 1.0, 1.0)
    used = {face.at(i) for face in box.faces for i in range(3)}
    assert used == set(range(len(box.vertices)))


def test_box_uvs_in_unit_square():
    box = Box(1.0, 2.0, 3.0)
    assert all(0.0 <= u <= 1.0 and 0.0 <= v <= 1.0 for u, v in box.uvs)


def test_cube_has_equal_sides():
    box = cube(200)
    assert (box.width, box.height, box.depth) == (200, 200, 200)
    assert box.vertices == Box(200, 200, 200).vertices


def test_line_geometry():
    line = LineGeometry((0, 0, 0), (10, 0, 0))
    assert line.vertices == [(0, 0, 0), (10, 0, 0)]
    assert line.faces == []
    assert line.array_count() == 2
    assert (line.start, line.end) == ((0, 0, 0), (10, 0, 0))
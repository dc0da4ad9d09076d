import pytest

from jagkit.n3d import (
    MAXLIGHTS,
    MAXPOLYPOINTS,
    ONE,
    UNTRANSFORMED,
    Bitmap,
    DeltaAnimation,
    Face,
    FrameAnimation,
    GpuAnimation,
    Light,
    LightModel,
    Matrix,
    N3DObject,
    Polygon,
    TPoint,
    XPoint,
    make_cube,
)


def test_cube_counts():
    cube = make_cube()
    assert (cube.numpolys, cube.numpoints, cube.nummaterials) == (4, 4, 2)


def test_cube_texture_on_front_material_only():
    texture = Bitmap(width=4, height=4, data=[0] * 16)
    cube = make_cube(texture)
    assert cube.materials[0].tmap is texture
    assert cube.materials[1].tmap is None
    assert cube.materials[0].color == 0x78C0
    assert cube.materials[1].color == 0x7FC0


def test_cube_corners():
    cube = make_cube()
    assert [(p.x, p.y, p.z) for p in cube.points] == [
        (-200, -200, 0), (200, -200, 0), (200, 200, 0), (-200, 200, 0),
    ]


def test_cube_normals_are_unit_length():
    for point in make_cube().points:
        length_sq = point.vx ** 2 + point.vy ** 2 + point.vz ** 2
        assert abs(length_sq - ONE * ONE) < ONE * ONE // 1000


def test_cube_faces_reference_valid_points_and_materials():
    cube = make_cube()
    for face in cube.faces:
        assert face.npts == 3
        assert all(0 <= index < cube.numpoints for index, _ in face.vertices)
        assert 0 <= face.material < cube.nummaterials


def test_cube_front_and_back_faces():
    faces = make_cube().faces
    assert [f.fz for f in faces] == [-0x4000, -0x4000, 0x4000, 0x4000]
    assert [f.material for f in faces] == [0, 0, 1, 1]


def test_face_texture_coords():
    face = make_cube().faces[0]
    assert face.texture_coords() == [(0, 0), (0xFF, 0), (0, 0xFF)]


def test_face_too_many_points():
    with pytest.raises(ValueError):
        Face(vertices=((0, 0), (1, 0), (2, 0), (3, 0)))


def test_light_model_limit():
    lights = [Light(bright=1) for _ in range(MAXLIGHTS)]
    assert LightModel(lights=lights).numlights == MAXLIGHTS
    with pytest.raises(ValueError):
        LightModel(lights=lights + [Light()])


def test_sunlight():
    assert Light(0, 0, ONE, 0).is_sunlight
    assert not Light(0, 0, 0, 0xC000).is_sunlight


def test_identity_matrix():
    m = Matrix.identity()
    assert (m.xrite, m.ydown, m.zhead) == (ONE, ONE, ONE)
    assert (m.yrite, m.xdown, m.xposn) == (0, 0, 0)


def test_object_defaults():
    obj = N3DObject()
    assert obj.M == Matrix()
    assert obj.data is None and obj.children is None


def test_tpoint_fields():
    tp = TPoint(basei=(0x1234 << 8) | 0x05)
    assert tp.intensity == 0x1234
    assert tp.clipcodes == 0x05
    assert tp.transformed
    assert not TPoint().transformed
    assert TPoint().clipcodes == UNTRANSFORMED


def test_polygon_limit():
    poly = Polygon()
    for _ in range(MAXPOLYPOINTS):
        poly.append(XPoint())
    assert poly.numpoints == MAXPOLYPOINTS
    with pytest.raises(ValueError):
        poly.append(XPoint())
    with pytest.raises(ValueError):
        Polygon(pt=[XPoint()] * (MAXPOLYPOINTS + 1))


def test_animation_types():
    assert (DeltaAnimation.type, FrameAnimation.type, GpuAnimation.type) == (0, 1, 2)
    frames = FrameAnimation(frames=[Matrix(), Matrix.identity()])
    assert frames.total_frames == 2
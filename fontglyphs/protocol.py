"""
Message classes for the glyph packet wire format.

The schema is the ``glyphs.proto`` used by vector map renderers:

    message glyph {
        required uint32 id = 1;
        optional bytes bitmap = 2;
        required uint32 width = 3;
        required uint32 height = 4;
        required sint32 left = 5;
        required sint32 top = 6;
        required uint32 advance = 7;
    }

    message fontstack {
        required string name = 1;
        required string range = 2;
        repeated glyph glyphs = 3;
    }

    message glyphs {
        repeated fontstack stacks = 1;
        extensions 16 to 8191;
    }

Classes are built from a descriptor at import time, so no generated
``_pb2`` module has to be kept in sync with the schema.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "llmr.glyphs"

_Field = descriptor_pb2.FieldDescriptorProto

GLYPH_FIELDS = [
    ("id", 1, _Field.TYPE_UINT32, _Field.LABEL_REQUIRED),
    ("bitmap", 2, _Field.TYPE_BYTES, _Field.LABEL_OPTIONAL),
    ("width", 3, _Field.TYPE_UINT32, _Field.LABEL_REQUIRED),
    ("height", 4, _Field.TYPE_UINT32, _Field.LABEL_REQUIRED),
    ("left", 5, _Field.TYPE_SINT32, _Field.LABEL_REQUIRED),
    ("top", 6, _Field.TYPE_SINT32, _Field.LABEL_REQUIRED),
    ("advance", 7, _Field.TYPE_UINT32, _Field.LABEL_REQUIRED),
]


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="glyphs.proto", package=PACKAGE, syntax="proto2"
    )

    glyph = proto.message_type.add(name="glyph")
    for name, number, field_type, label in GLYPH_FIELDS:
        glyph.field.add(name=name, number=number, type=field_type, label=label)

    fontstack = proto.message_type.add(name="fontstack")
    fontstack.field.add(
        name="name", number=1, type=_Field.TYPE_STRING, label=_Field.LABEL_REQUIRED
    )
    fontstack.field.add(
        name="range", number=2, type=_Field.TYPE_STRING, label=_Field.LABEL_REQUIRED
    )
    fontstack.field.add(
        name="glyphs",
        number=3,
        type=_Field.TYPE_MESSAGE,
        label=_Field.LABEL_REPEATED,
        type_name=f".{PACKAGE}.glyph",
    )

    glyphs = proto.message_type.add(name="glyphs")
    glyphs.field.add(
        name="stacks",
        number=1,
        type=_Field.TYPE_MESSAGE,
        label=_Field.LABEL_REPEATED,
        type_name=f".{PACKAGE}.fontstack",
    )
    # Extension range end is exclusive in descriptors.
    glyphs.extension_range.add(start=16, end=8192)

    return proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())

Glyph = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.glyph"))
Fontstack = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{PACKAGE}.fontstack")
)
Glyphs = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.glyphs"))

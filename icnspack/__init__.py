"""
# icnspack: .iconset <-> .icns without touching the PNGs.

An .icns file is a binary container: a header followed by chunks made of a type,
a length and the data. The layout of each header is described declaratively

    class IcnsChunk(Chunk):
        type   = fields.StringField(4)
        length = fields.StructField('I', endianess=fields.Endianess.BIG_ENDIAN)

and two operations are defined for a Chunk and its fields

 1. unpack(): read the binary data from a stream and build the high-level
    representation, each field reading exactly the bytes it needs starting
    from the actual position of the stream.

 2. pack(): encode the high-level representation into binary data, writing
    it to a stream if one is given.

The data of the icons is never loaded by the format description: the
conversion functions in icnspack.icns.iconset copy it between files with a
bounded buffer.
"""

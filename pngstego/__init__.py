"""
# pngstego: PNG files at the chunk level.

A file format is described declaratively: a Chunk is a class whose attributes
are fields, each field knowing its size, its binary representation and how
to read itself from a stream.

Two basic main operations are defined for the file format and its sub components:

 1. unpack(): the more straightforward, i.e., reading the binary data
    and build a high-level representation of that.
    The fields are read one after the other from the actual offset of the
    stream and each one knows how many bytes needs to read (possibly
    depending on another field, like the data of a PNG chunk depending on
    its length).

 2. pack(): encode the high-level representation into binary data,
    giving the fields the possibility to update themselves first (this is
    how the CRC of a chunk is recomputed).

to these we add one more

 3. relayout(): recompute offset and size of each component.

The PNG format is in pngstego.images.png: it allows to embed a message in a
custom chunk, find it by its type and remove it.
"""

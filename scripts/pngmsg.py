#!/usr/bin/env python3
'''
Hide, show and remove messages stored in custom chunks of a PNG file.

 $ pngmsg.py encode image.png ruSt "this is a secret"
 $ pngmsg.py decode image.png ruSt
 $ pngmsg.py remove image.png ruSt
 $ pngmsg.py print image.png
'''
import argparse
import logging
import os
import sys

from pngstego.exceptions import PNGStegoException
from pngstego.images.png.utils import (
    load,
    save,
    hide_message,
    reveal_message,
    strip_message,
    get_image_header,
)


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def encode(args):
    png = load(args.image_path)
    hide_message(png, args.chunk_type, args.message)

    save(png, args.output_file or args.image_path)


def decode(args):
    png = load(args.image_path)
    message = reveal_message(png, args.chunk_type)

    if message is None:
        print('There is no hidden message in this file.')
    else:
        print(f'Encoded message is: "{message}"')


def remove(args):
    png = load(args.image_path)
    chunk = strip_message(png, args.chunk_type)
    # without IHDR or IEND the image can't be loaded back
    png.validate()

    if not args.dry_run:
        save(png, args.output or args.image_path)

    print(f'Chunk with type {chunk.chunk_type} was removed')


def dump(args):
    png = load(args.image_path)

    header = get_image_header(png)
    if header is not None:
        print(f'IHDR: {header}')

    print(png)


def get_parser():
    parser = argparse.ArgumentParser(description='hide messages into PNG chunks')
    subparsers = parser.add_subparsers(dest='command', required=True)

    encode_parser = subparsers.add_parser('encode', help='store a message into a new chunk')
    encode_parser.add_argument('image_path')
    encode_parser.add_argument('chunk_type')
    encode_parser.add_argument('message')
    encode_parser.add_argument('output_file', nargs='?', help='write here instead of overwriting the image')
    encode_parser.set_defaults(func=encode)

    decode_parser = subparsers.add_parser('decode', help='print the message stored in a chunk')
    decode_parser.add_argument('image_path')
    decode_parser.add_argument('chunk_type')
    decode_parser.set_defaults(func=decode)

    remove_parser = subparsers.add_parser('remove', help='remove the first chunk with the given type')
    remove_parser.add_argument('image_path')
    remove_parser.add_argument('chunk_type')
    remove_parser.add_argument('--output', help='write here instead of overwriting the image')
    remove_parser.add_argument('--dry-run', action='store_true', help='do not write the image back')
    remove_parser.set_defaults(func=remove)

    print_parser = subparsers.add_parser('print', help='list the chunks of the image')
    print_parser.add_argument('image_path')
    print_parser.set_defaults(func=dump)

    return parser


def main(argv=None):
    args = get_parser().parse_args(argv)

    try:
        args.func(args)
    except (PNGStegoException, OSError) as e:
        logger.error(f'{args.command} failed for \'{args.image_path}\': {e}')
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())

"""
LSB Lab Command Line Interface

Hide a file or a piece of text in an image, and get it back out.

Usage:
    lsb-lab encode TARGET_IMAGE PAYLOAD [OUTPUT]
    lsb-lab decode ENCODED_IMAGE [OUTPUT]
    lsb-lab capacity IMAGE
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from lsb_lab.services.lsb_codec import __version__
from lsb_lab.services.lsb_codec.core.service import LsbCodecService, resolve_payload
from lsb_lab.services.lsb_codec.models.codec_models import StegoLimits
from lsb_lab.services.lsb_codec.utils.image_utils import load_image_from_input
from lsb_lab.utility.constants_manager import ConstantsManager


DEFAULT_OUTPUT = "encoded.png"


class LsbLabCLI:
    """Main CLI application for LSB Lab."""

    def __init__(self):
        self.constants = ConstantsManager()
        self.service = LsbCodecService(
            StegoLimits(
                max_cover_pixels=self.constants.get_max_cover_pixels(),
                max_payload_bytes=self.constants.get_max_payload_bytes(),
            )
        )

    def run(self, args: List[str]) -> int:
        """Run the CLI with given arguments."""
        parser = self.create_parser()
        parsed = parser.parse_args(args)

        # only the result line is printed unless a level is asked for
        level = parsed.log_level or self.constants.get_log_level(default='WARNING')
        logging.basicConfig()
        logging.getLogger().setLevel(level)

        if hasattr(parsed, 'func'):
            try:
                return parsed.func(parsed)
            except Exception as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1
        else:
            parser.print_help()
            return 0

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog="lsb-lab",
            description="Hide data in the least significant bits of an image",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
    lsb-lab encode cover.jpg secret.pdf hidden.png
    lsb-lab encode cover.png "meet at noon"
    lsb-lab decode hidden.png
    lsb-lab decode hidden.png recovered
            """
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'LSB Lab v{__version__}'
        )
        parser.add_argument(
            '--log-level',
            choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
            default=None,
            help='Logging level (default: LSB_LOG_LEVEL or WARNING)'
        )

        subparsers = parser.add_subparsers(title='commands', dest='command')

        self.add_encode_command(subparsers)
        self.add_decode_command(subparsers)
        self.add_capacity_command(subparsers)

        return parser

    def add_encode_command(self, subparsers):
        """Add encode command to parser."""
        cmd = subparsers.add_parser('encode', aliases=['e'], help='Encode payload in image')
        cmd.add_argument('target_image', help='Target image to encode the payload into')
        cmd.add_argument('payload', help='Payload (file or string) to hide in the image')
        cmd.add_argument('output', nargs='?', default=DEFAULT_OUTPUT,
                         help='Output file name, always saved as PNG (default: encoded.png)')
        cmd.set_defaults(func=self.handle_encode)

    def add_decode_command(self, subparsers):
        """Add decode command to parser."""
        cmd = subparsers.add_parser('decode', aliases=['d'], help='Decode payload from an image')
        cmd.add_argument('encoded_image', help='Encoded image to extract the payload from')
        cmd.add_argument('output', nargs='?', default=None,
                         help='Output file name for the extracted payload; '
                              'the original file extension is preserved')
        cmd.set_defaults(func=self.handle_decode)

    def add_capacity_command(self, subparsers):
        """Add capacity command to parser."""
        cmd = subparsers.add_parser('capacity', aliases=['c'], help='Show how much an image can hold')
        cmd.add_argument('image', help='Image to inspect')
        cmd.add_argument('--filename', default='', help='Filename that would be stored with the payload')
        cmd.set_defaults(func=self.handle_capacity)

    def handle_encode(self, args) -> int:
        """Handle encode command."""
        cover = load_image_from_input(path=args.target_image)
        payload = resolve_payload(args.payload)
        stego_image, _ = self.service.hide(cover, payload)
        output_path = self.service.save_png(stego_image, args.output)
        print(f"Encoded image saved to '{output_path}'")
        return 0

    def handle_decode(self, args) -> int:
        """Handle decode command."""
        image = load_image_from_input(path=args.encoded_image)
        if args.output:
            target = Path(args.output)
            result = self.service.reveal_to_directory(image, target.parent, target.name)
        else:
            result = self.service.reveal_to_directory(image, Path("."))
        print(f"Decoded payload saved to '{result.output_path}'")
        if args.output:
            print(f"Original file name was '{result.filename}'")
        return 0

    def handle_capacity(self, args) -> int:
        """Handle capacity command."""
        image = load_image_from_input(path=args.image)
        result = self.service.capacity(image, args.filename)
        print(f"Dimensions:        {result.width}x{result.height}")
        print(f"Capacity:          {result.capacity_bits} bits")
        print(f"Header overhead:   {result.header_bits} bits")
        print(f"Max payload size:  {result.max_payload_bytes} bytes")
        return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    cli = LsbLabCLI()
    sys.exit(cli.run(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    main()

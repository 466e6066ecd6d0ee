# SPDX-License-Identifier: GPL-3.0-or-later

import sys

from stickynote.application import StickyNoteApp


def main():
    app = StickyNoteApp()
    return app.run(sys.argv)


if __name__ == '__main__':
    sys.exit(main())

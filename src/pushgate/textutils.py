# -*- mode: python; encoding: utf-8 -*-
#
# Copyright 2026 the Pushgate contributors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License.  You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.  See the
# License for the specific language governing permissions and limitations under
# the License.

import re
from typing import Collection, Union

# Git prefixes every line of hook output with this when relaying it to the
# pushing client.
REMOTE_PREFIX = "remote: "
HOOK_LINE_LENGTH = 80 - len(REMOTE_PREFIX)


def reflow(
    text: str,
    line_length: int = HOOK_LINE_LENGTH,
    indent: int = 0,
    hanging_indent: int = 0,
) -> str:
    if line_length == 0:
        return text

    paragraphs = re.split("\n\n+", text.replace("\r", ""))
    spaces = " " * indent
    hanging_spaces = " " * (indent + hanging_indent)

    for paragraph_index, paragraph in enumerate(paragraphs):
        lines = paragraph.split("\n")
        # Leave paragraphs that look pre-formatted (indented lines, bullet
        # lists or deliberately short lines) alone, apart from indenting them.
        for line_index, line in enumerate(lines):
            if (line and line[0] in " \t-*") or (
                line_index < len(lines) - 1 and len(line) < 0.5 * line_length
            ):
                if indent:
                    paragraphs[paragraph_index] = "\n".join(
                        spaces + line for line in lines
                    )
                break
        else:
            lines = []
            line = spaces
            ws = ""
            for word in re.split(r"(\s+)", paragraph):
                if not word.strip():
                    ws = " " if "\n" in word else word
                    continue
                if len(line) > indent and len(line) + len(ws) + len(word) > line_length:
                    lines.append(line)
                    line = hanging_spaces
                if len(line) > indent:
                    line += ws
                line += word
            if line:
                lines.append(line)
            paragraphs[paragraph_index] = "\n".join(lines)

    return "\n\n".join(paragraphs)


def decode(
    text: Union[bytes, str], *, encodings: Collection[str] = ("utf-8",)
) -> str:
    if isinstance(text, str):
        return text

    for encoding in encodings:
        try:
            return text.decode(encoding)
        except UnicodeDecodeError:
            continue
        except LookupError:
            pass

    return text.decode("ascii", errors="replace")

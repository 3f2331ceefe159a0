#!/usr/bin/env python3
"""
ADMONFENCE CONVERSION PIPELINE - The Transducer
-----------------------------------------------
This is the central coordinator of a document conversion. It walks the
classified lines once, left to right, keeping a stack of open admonitions
and deciding from indentation alone when each one ends.

    !!! bug "Known Issue"          :::danger[Known Issue]
        body               ->          body
                                   :::

Nested admonitions get one more colon per level, so the closing fence of a
block always repeats its opening fence.

Author: AdmonFence Team
Date: 2026-10-18
"""

from typing import Optional

from admonfence.conversion.context import ConvertContext
from admonfence.conversion.lexer import MarkerLexer
from admonfence.conversion.resolver import TitleResolver
from admonfence.conversion.stack import BlockStack
from admonfence.core.models import MarkerLine, TypeMap


class ConversionPipeline:
    """
    The Orchestrator: lexing, type resolution and fence emission happen in a
    strictly defined order for every line.
    """

    def __init__(self, type_map: Optional[TypeMap] = None):
        self.type_map = type_map or TypeMap()
        self.lexer = MarkerLexer()
        self.resolver = TitleResolver(self.type_map)

    def run(self, input_text: str) -> ConvertContext:
        """
        Converts one document. The stack lives only for this call, so
        documents never share state.
        """
        context = ConvertContext(raw_text=input_text, lines=self.lexer.tokenize(input_text))
        stack = BlockStack()

        for line in context.lines:
            if line.is_open:
                self._open_block(line, stack, context)
                continue

            if stack and not line.is_blank:
                self._close_while(stack, context, lambda top: top.content_indent > line.indent)

            context.output_lines.append(line.raw_line)

        # End of input: flush whatever is still open
        self._close_while(stack, context, lambda top: True)
        return context

    def _open_block(self, line: MarkerLine, stack: BlockStack, context: ConvertContext):
        destination, title, recognized = self.resolver.resolve(line.raw_type, line.title)
        if not recognized:
            context.fallback_types.append(line.raw_type)

        # Siblings and equal-or-deeper ancestors end before this block opens
        self._close_while(stack, context, lambda top: top.base_indent >= line.indent)

        open_tag = f"{line.indent_str}{stack.open_fence()}{destination}"
        if title:
            open_tag += f"[{title}]"
        context.output_lines.append(open_tag)

        frame = stack.push(line.indent, destination)
        context.blocks_converted += 1
        context.max_depth = max(context.max_depth, frame.depth)

    def _close_while(self, stack: BlockStack, context: ConvertContext, should_close):
        while stack and should_close(stack.peek()):
            frame = stack.pop()
            context.output_lines.append(stack.close_marker(frame))


def transform(text: str, type_map: Optional[TypeMap] = None) -> str:
    """Pure text-to-text entry point: MkDocs admonitions in, Docusaurus containers out."""
    return ConversionPipeline(type_map).run(text).converted_text

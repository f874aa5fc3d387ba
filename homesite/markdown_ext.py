from __future__ import annotations

import xml.etree.ElementTree as etree
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor, SimpleTagInlineProcessor
from markdown.util import AtomicString

RE_STRIKETHROUGH = r"(~~)(?=\S)(.+?)(?<=\S)~~"
RE_BARE_URL = r"(?<![\"'=<>\w/])(?:https?://|www\.)[^\s<>\"']+"
TRAILING_PUNCTUATION = ".,:;!?)]*_~"


class BareUrlProcessor(InlineProcessor):
    def handleMatch(self, m, data):
        url = m.group(0)
        end = m.end(0)
        while url and url[-1] in TRAILING_PUNCTUATION:
            if url[-1] == ")" and url.count("(") >= url.count(")"):
                break
            url = url[:-1]
            end -= 1
        if not url:
            return None, None, None

        href = url if "://" in url else f"http://{url}"
        el = etree.Element("a")
        el.set("href", href)
        el.text = AtomicString(url)
        return el, m.start(0), end


class GithubFlavorExtension(Extension):
    def extendMarkdown(self, md):
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(RE_STRIKETHROUGH, "del"),
            "strikethrough",
            65,
        )
        md.inlinePatterns.register(
            BareUrlProcessor(RE_BARE_URL, md),
            "bare_url",
            115,
        )

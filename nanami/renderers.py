"""
# Nanami: renderers.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Syntax tree to HTML.

Each node type has exactly one rendering rule, and children are rendered before their parent.
Text content is emitted verbatim; values written into attributes are escaped for double-quoted context.
The output is valid but unformatted HTML, intended to be handed to a pretty-printer.
"""

from typing import Any, Callable

from nanami.constants import HTML5_TEMPLATE
from nanami.exceptions import RenderDepthError, UnhandledNodeError
from nanami.nodes import (
    Case,
    Content,
    Document,
    HtmlTag,
    Image,
    Link,
    Plain,
    Ref,
    Sources,
    Text,
)
from nanami.utilities import escape_attribute_value_html


class HtmlRenderer:
    """
    Object rendering a Nama syntax tree to HTML.

    | Node       | Output                                                     |
    | ---------- | ---------------------------------------------------------- |
    | `Plain`    | the text                                                   |
    | `Ref`      | the reference name (references are not resolved)           |
    | `Link`     | `<a href="«url»">«text»</a>`                               |
    | `Image`    | `<img src="«path»" alt="«alt»">`                           |
    | `HtmlTag`  | the tag, passed through                                    |
    | `Sources`  | `<div class="sources"></div>`                              |
    | `Text`     | the inline nodes, concatenated                             |
    | `Case`     | `<div class="case" data-name=".." data-url="..">«body»</div>` |
    | `Content`  | `<div class="content">«cases»</div>`                       |
    | `Document` | `HTML5_TEMPLATE` filled with the title and content         |
    """
    _render_function_from_node_type: dict[type, Callable[[Any], str]]

    def __init__(self):
        self._render_function_from_node_type = {
            Plain: self.render_plain,
            Ref: self.render_ref,
            Link: self.render_link,
            Image: self.render_image,
            HtmlTag: self.render_html_tag,
            Sources: self.render_sources,
            Text: self.render_text,
            Case: self.render_case,
            Content: self.render_content,
            Document: self.render_document,
        }

    def render(self, node: Any) -> str:
        try:
            render_function = self._render_function_from_node_type[type(node)]
        except KeyError:
            raise UnhandledNodeError(node)

        try:
            return render_function(node)
        except RecursionError as recursion_error:
            raise RenderDepthError(node) from recursion_error

    def render_children(self, nodes: tuple[Any, ...]) -> str:
        return ''.join(self.render(node) for node in nodes)

    @staticmethod
    def render_plain(plain: Plain) -> str:
        return plain.text

    @staticmethod
    def render_ref(ref: Ref) -> str:
        return ref.name

    @staticmethod
    def render_link(link: Link) -> str:
        href = escape_attribute_value_html(link.url)
        return f'<a href="{href}">{link.text}</a>'

    @staticmethod
    def render_image(image: Image) -> str:
        src = escape_attribute_value_html(image.path)
        alt = escape_attribute_value_html(image.alt)
        return f'<img src="{src}" alt="{alt}">'

    @staticmethod
    def render_html_tag(html_tag: HtmlTag) -> str:
        slash = '/' if html_tag.closing else ''

        attribute_sequence = ''
        for name, value in html_tag.attributes:
            if value is None:  # boolean attribute
                attribute_sequence += f' {name}'
            else:
                attribute_sequence += f' {name}="{value}"'

        ending = '/>' if html_tag.self_closing else '>'

        return f'<{slash}{html_tag.name}{attribute_sequence}{ending}'

    @staticmethod
    def render_sources(sources: Sources) -> str:
        # TODO: render footnotes once references are resolved against a webography
        return '<div class="sources"></div>'

    def render_text(self, text: Text) -> str:
        return self.render_children(text.inline)

    def render_case(self, case: Case) -> str:
        attribute_sequence = f' data-name="{escape_attribute_value_html(case.name)}"'
        if case.url is not None:
            attribute_sequence += f' data-url="{escape_attribute_value_html(case.url)}"'

        body = self.render_children(case.body)

        return f'<div class="case"{attribute_sequence}>{body}</div>'

    def render_content(self, content: Content) -> str:
        return f'<div class="content">{self.render_children(content.cases)}</div>'

    def render_document(self, document: Document) -> str:
        return HTML5_TEMPLATE.format(title=document.title, content=self.render(document.content))

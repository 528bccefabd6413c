"""
# Nanami: grammars.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

The Nama and Webography grammars.

Nama:
````
document         = ws title ws nlp_flag? ws content ws
title            = `title:` hws «title» line_terminator
nlp_flag         = `!nlp`
content          = `content` ws `{` ws (case_statement ws)* ws `}`
case_statement   = `case(` «case_name» `)` (`(` «case_url» `)`)? ws `{` case_content* ws `}`
case_content     = ws (text_block | case_statement | sources)
text_block       = `text` ws `{` ws text_content ws `}`
text_content     = (ref | image | link | self_closing_tag | html_tag | plain)+
ref              = `${` «identifier» `}`
image            = `{` «path» `}{` «alt» `}`
link             = `{` «url» `}{` «text» `}`
self_closing_tag = `<` `/`? «tag_name» attribute* ws `/>`
html_tag         = `<` `/`? «tag_name» attribute* ws `>`
attribute        = ws «attribute_name» (`="` «attribute_value» `"`)?
sources          = `sources` ws `{` ws `{footnotes}`? ws `}`
````

Webography:
````
webography = (entry blank_line?)* ws
entry      = ws `T: ` «title» line_terminator
             hws `L: ` «link» line_terminator
             hws `N: ` «name» line_terminator
             hws `D: ` «date»
blank_line = line_terminator line_terminator
````
"""

from typing import Optional

from nanami.nodes import (
    Case,
    Content,
    Document,
    Entry,
    HtmlTag,
    Image,
    Link,
    Plain,
    Ref,
    Sources,
    Text,
    Webography,
)
from nanami.primitives import (
    Captures,
    Grammar,
    Rule,
    absent,
    any_character,
    build,
    capture,
    character_class,
    choice,
    literal,
    maybe,
    one_or_more,
    sequence,
    zero_or_more,
)

IDENTIFIER_CHARACTER_REGEX = r'[a-zA-Z0-9_]'
URL_CHARACTER_REGEX = r'''[a-zA-Z0-9\-._~:/?#\[\]@!$&'*+,;=]'''
PATH_CHARACTER_REGEX = r'[a-zA-Z0-9\-._/]'
TAG_NAME_CHARACTER_REGEX = r'[a-zA-Z]'
ATTRIBUTE_NAME_CHARACTER_REGEX = r'[a-zA-Z0-9_:\-]'


def make_title(captures: Captures) -> str:
    return captures.get('title').strip()


def make_ref(captures: Captures) -> Ref:
    return Ref(name=captures.get('identifier'))


def make_image(captures: Captures) -> Image:
    return Image(path=captures.get('path'), alt=captures.get('alt'))


def make_link(captures: Captures) -> Link:
    return Link(url=captures.get('url'), text=captures.get('text'))


def make_attribute(captures: Captures) -> tuple[str, Optional[str]]:
    return captures.get('attribute_name'), captures.get('attribute_value')


def make_self_closing_tag(captures: Captures) -> HtmlTag:
    return HtmlTag(
        name=captures.get('tag_name'),
        attributes=captures.nodes(),
        self_closing=True,
        closing=captures.has('closing'),
    )


def make_html_tag(captures: Captures) -> HtmlTag:
    return HtmlTag(name=captures.get('tag_name'), attributes=captures.nodes(), closing=captures.has('closing'))


def make_plain(captures: Captures) -> Plain:
    return Plain(text=captures.get('plain'))


def make_text(captures: Captures) -> Text:
    return Text(inline=captures.nodes())


def make_sources(captures: Captures) -> Sources:
    return Sources(has_footnotes=captures.has('footnotes'))


def make_case(captures: Captures) -> Case:
    return Case(name=captures.get('case_name'), url=captures.get('case_url'), body=captures.nodes())


def make_content(captures: Captures) -> Content:
    return Content(cases=captures.nodes())


def make_document(captures: Captures) -> Document:
    content, = captures.nodes()
    return Document(title=captures.get('title'), content=content, nlp_flag=captures.has('nlp_flag'))


def make_entry(captures: Captures) -> Entry:
    return Entry(
        title=captures.get('title'),
        link=captures.get('link'),
        name=captures.get('name'),
        date=captures.get('date'),
    )


def make_webography(captures: Captures) -> Webography:
    return Webography(entries=captures.nodes())


def build_nama_grammar() -> Grammar:
    whitespace = zero_or_more(character_class(r'[\s]', 'whitespace'))
    horizontal_whitespace = zero_or_more(character_class(r'[^\S\n]', 'horizontal whitespace'))
    line_terminator = choice(literal('\r\n'), literal('\n'))
    line_character = character_class(r'[^\r\n]', 'non-line-terminator character')
    brace_free_character = character_class(r'[^{}]', 'non-brace character')
    url_character = character_class(URL_CHARACTER_REGEX, 'URL character')
    path_character = character_class(PATH_CHARACTER_REGEX, 'path character')

    title = Rule('title')
    nlp_flag = Rule('nlp_flag')
    ref = Rule('ref')
    image = Rule('image')
    link = Rule('link')
    attribute = Rule('attribute')
    self_closing_tag = Rule('self_closing_tag')
    html_tag = Rule('html_tag')
    plain = Rule('plain')
    text_content = Rule('text_content')
    text_block = Rule('text_block')
    sources = Rule('sources')
    case_content = Rule('case_content')
    case_statement = Rule('case_statement')
    content = Rule('content')
    document = Rule('document')

    title.define(
        build(
            sequence(
                literal('title:'),
                horizontal_whitespace,
                capture('title', one_or_more(line_character)),
                line_terminator,
            ),
            make_title,
        )
    )
    nlp_flag.define(literal('!nlp'))

    ref.define(
        build(
            sequence(
                literal('${'),
                capture('identifier', one_or_more(character_class(IDENTIFIER_CHARACTER_REGEX, 'identifier character'))),
                literal('}'),
            ),
            make_ref,
        )
    )
    image.define(
        build(
            sequence(
                literal('{'),
                capture('path', one_or_more(path_character)),
                literal('}{'),
                capture('alt', one_or_more(brace_free_character)),
                literal('}'),
            ),
            make_image,
        )
    )
    link.define(
        build(
            sequence(
                literal('{'),
                capture('url', one_or_more(url_character)),
                literal('}{'),
                capture('text', one_or_more(brace_free_character)),
                literal('}'),
            ),
            make_link,
        )
    )

    tag_name = capture('tag_name', one_or_more(character_class(TAG_NAME_CHARACTER_REGEX, 'tag name letter')))
    attribute.define(
        build(
            sequence(
                one_or_more(character_class(r'[\s]', 'whitespace')),
                capture(
                    'attribute_name',
                    one_or_more(character_class(ATTRIBUTE_NAME_CHARACTER_REGEX, 'attribute name character')),
                ),
                maybe(
                    sequence(
                        literal('="'),
                        capture('attribute_value', zero_or_more(character_class(r'[^"]', 'non-quote character'))),
                        literal('"'),
                    )
                ),
            ),
            make_attribute,
        )
    )
    self_closing_tag.define(
        build(
            sequence(
                literal('<'),
                maybe(capture('closing', literal('/'))),
                tag_name,
                zero_or_more(attribute),
                whitespace,
                literal('/>'),
            ),
            make_self_closing_tag,
        )
    )
    html_tag.define(
        build(
            sequence(
                literal('<'),
                maybe(capture('closing', literal('/'))),
                tag_name,
                zero_or_more(attribute),
                whitespace,
                literal('>'),
            ),
            make_html_tag,
        )
    )

    # whitespace running up to the closing brace belongs to the block, not to the text
    plain_stopper = choice(
        ref,
        image,
        link,
        self_closing_tag,
        html_tag,
        literal('{'),
        literal('}'),
        sequence(one_or_more(character_class(r'[\s]', 'whitespace')), literal('}')),
    )
    plain.define(
        build(
            capture('plain', one_or_more(sequence(absent(plain_stopper), any_character()))),
            make_plain,
        )
    )
    text_content.define(one_or_more(choice(ref, image, link, self_closing_tag, html_tag, plain)))
    text_block.define(
        build(
            sequence(
                literal('text'), whitespace, literal('{'), whitespace,
                text_content,
                whitespace, literal('}'),
            ),
            make_text,
        )
    )

    sources.define(
        build(
            sequence(
                literal('sources'), whitespace, literal('{'), whitespace,
                maybe(capture('footnotes', literal('{footnotes}'))),
                whitespace, literal('}'),
            ),
            make_sources,
        )
    )

    case_content.define(sequence(whitespace, choice(text_block, case_statement, sources)))
    case_statement.define(
        build(
            sequence(
                literal('case('),
                capture('case_name', one_or_more(character_class(r'[^)]', 'non-parenthesis character'))),
                literal(')'),
                maybe(sequence(literal('('), capture('case_url', one_or_more(url_character)), literal(')'))),
                whitespace, literal('{'),
                zero_or_more(case_content),
                whitespace, literal('}'),
            ),
            make_case,
        )
    )

    content.define(
        build(
            sequence(
                literal('content'), whitespace, literal('{'), whitespace,
                zero_or_more(sequence(case_statement, whitespace)),
                whitespace, literal('}'),
            ),
            make_content,
        )
    )
    document.define(
        build(
            sequence(
                whitespace,
                capture('title', title),
                whitespace,
                maybe(capture('nlp_flag', nlp_flag)),
                whitespace,
                content,
                whitespace,
            ),
            make_document,
        )
    )

    return Grammar(
        'nama',
        [
            title, nlp_flag, ref, image, link, attribute, self_closing_tag, html_tag, plain,
            text_content, text_block, sources, case_content, case_statement, content, document,
        ],
        root_rule_name='document',
    )


def build_webography_grammar() -> Grammar:
    whitespace = zero_or_more(character_class(r'[\s]', 'whitespace'))
    horizontal_whitespace = zero_or_more(character_class(r'[^\S\n]', 'horizontal whitespace'))
    line_terminator = choice(literal('\r\n'), literal('\n'))
    field_value = one_or_more(character_class(r'[^\r\n]', 'non-line-terminator character'))

    entry = Rule('entry')
    blank_line = Rule('blank_line')
    webography = Rule('webography')

    entry.define(
        build(
            sequence(
                whitespace, literal('T: '), capture('title', field_value), line_terminator,
                horizontal_whitespace, literal('L: '), capture('link', field_value), line_terminator,
                horizontal_whitespace, literal('N: '), capture('name', field_value), line_terminator,
                horizontal_whitespace, literal('D: '), capture('date', field_value),
            ),
            make_entry,
        )
    )
    blank_line.define(sequence(line_terminator, line_terminator))
    webography.define(
        build(
            sequence(zero_or_more(sequence(entry, maybe(blank_line))), whitespace),
            make_webography,
        )
    )

    return Grammar('webography', [entry, blank_line, webography], root_rule_name='webography')


NAMA_GRAMMAR = build_nama_grammar()
WEBOGRAPHY_GRAMMAR = build_webography_grammar()

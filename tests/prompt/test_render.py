"""Tests for the prompt tree renderer."""

from promptweave.prompt import (
    UNSET,
    ElementKind,
    FilePart,
    PromptRenderer,
    Role,
    TextPart,
    create_element,
    render,
    render_to_content,
    render_to_string,
)
from promptweave.prompt.components import (
    Assistant,
    Each,
    File,
    Fragment,
    Group,
    Heading,
    If,
    Json,
    Linebreak,
    Native,
    Show,
    System,
    ToolCall,
    ToolResult,
    User,
)


class TestBasicRendering:
    """Tests for message markers and text leaves."""

    def test_empty_input(self):
        """Empty input renders no messages."""
        assert render([]) == []

    def test_single_user_message(self):
        """A user marker opens one user message."""
        messages = render(User("Hello"))

        assert len(messages) == 1
        assert messages[0].role == Role.USER
        assert messages[0].content == "Hello"

    def test_sibling_order_preserved(self):
        """Sibling text concatenates in source order."""
        messages = render([User("a", "b", "c")])

        assert messages[0].content == "abc"

    def test_numbers_render_as_text(self):
        """Numeric leaves are stringified."""
        messages = render(User("Count: ", 3, " / ", 1.5))

        assert messages[0].content == "Count: 3 / 1.5"

    def test_integral_floats_drop_fraction(self):
        """Whole-number floats render without a trailing `.0`."""
        messages = render(User(1.0, " ", -2.0, " ", 0.25))

        assert messages[0].content == "1 -2 0.25"

    def test_none_and_booleans_ignored(self):
        """None and booleans render nothing."""
        messages = render(User("a", None, True, False, "b"))

        assert messages[0].content == "ab"

    def test_text_without_open_message_dropped(self):
        """Top-level text with no message is discarded."""
        messages = render(["stray text", User("hi")])

        assert len(messages) == 1
        assert messages[0].content == "hi"

    def test_content_is_trimmed(self):
        """Outer whitespace is trimmed on finalization."""
        messages = render(User("\n  Hello  \n"))

        assert messages[0].content == "Hello"

    def test_messages_never_reordered(self):
        """Non-system messages keep authored order."""
        messages = render([User("one"), Assistant("two"), User("three")])

        assert [m.content for m in messages] == ["one", "two", "three"]
        assert [m.role for m in messages] == [Role.USER, Role.ASSISTANT, Role.USER]

    def test_to_dict_omits_unset_fields(self):
        """Plain messages serialize to role and content only."""
        messages = render(User("hi"))

        assert messages[0].to_dict() == {"role": "user", "content": "hi"}


class TestSystemMessages:
    """Tests for system message combination."""

    def test_system_moved_first(self):
        """A lone system message is placed first."""
        messages = render([User("hi"), System("Be brief.")])

        assert messages[0].role == Role.SYSTEM
        assert messages[0].content == "Be brief."
        assert messages[1].content == "hi"

    def test_multiple_systems_combined(self):
        """System messages merge with a blank line between them."""
        messages = render([System("First"), User("hi"), System("Second")])

        assert len(messages) == 2
        assert messages[0].content == "First\n\nSecond"

    def test_native_system_not_combined(self):
        """Native passthrough messages are left where they are."""
        native = {"role": "system", "content": "raw"}
        messages = render([User("hi"), Native(native), System("S")])

        assert messages[0].content == "S"
        assert messages[2].is_native is True
        assert messages[2].native_content == native


class TestToolCalls:
    """Tests for tool call rendering."""

    def test_tool_call_opens_assistant_message(self):
        """A tool call after a user message opens an assistant message."""
        messages = render([
            User("Weather?"),
            ToolCall(id="call_1", name="get_weather", input={"city": "Tokyo"}),
        ])

        assert messages[1].role == Role.ASSISTANT
        assert messages[1].content == ""
        assert messages[1].tool_calls[0].id == "call_1"
        assert messages[1].tool_calls[0].name == "get_weather"
        assert messages[1].tool_calls[0].input == {"city": "Tokyo"}

    def test_consecutive_tool_calls_merge(self):
        """Tool calls following an assistant message join it."""
        messages = render([
            Assistant("Let me check."),
            ToolCall(id="a", name="one"),
            ToolCall(id="b", name="two"),
        ])

        assert len(messages) == 1
        assert messages[0].content == "Let me check."
        assert [call.id for call in messages[0].tool_calls] == ["a", "b"]

    def test_tool_call_input_defaults_to_empty(self):
        """Missing input becomes an empty mapping."""
        messages = render(ToolCall(id="a", name="noop"))

        assert messages[0].tool_calls[0].input == {}

    def test_non_mapping_input_degrades_to_empty(self):
        """Tool call input that is not a mapping becomes an empty mapping."""
        messages = render([
            create_element(ElementKind.TOOL_CALL, {"id": "1", "name": "n", "input": "abc"}),
            create_element(ElementKind.TOOL_CALL, {"id": "2", "name": "n", "input": 7}),
        ])

        assert [call.input for call in messages[0].tool_calls] == [{}, {}]


class TestToolResults:
    """Tests for tool result rendering and auto-detection."""

    def test_text_result(self):
        """Text children become the result content."""
        messages = render(ToolResult("Sunny, 22C", id="call_1", name="get_weather"))

        message = messages[0]
        assert message.role == Role.TOOL
        assert message.content == "Sunny, 22C"
        assert message.tool_call_id == "call_1"
        assert message.tool_name == "get_weather"
        assert message.has_tool_result_json is False

    def test_single_json_child_detected(self):
        """A lone Json child is reported as structured data."""
        messages = render(ToolResult(Json({"temp": 22}), id="call_1"))

        assert messages[0].tool_result_json == {"temp": 22}
        assert messages[0].content == '{"temp":22}'

    def test_whitespace_siblings_ignored_for_detection(self):
        """Whitespace-only strings do not count as meaningful children."""
        messages = render(ToolResult("\n  ", Json([1, 2]), "  ", id="call_1"))

        assert messages[0].tool_result_json == [1, 2]

    def test_mixed_children_fall_back_to_text(self):
        """More than one meaningful child disables detection."""
        messages = render(ToolResult("Result: ", Json({"ok": True}), id="call_1"))

        assert messages[0].tool_result_json is UNSET
        assert messages[0].content == 'Result: {"ok":true}'

    def test_explicit_json_takes_precedence(self):
        """The json attribute wins over children, even when None."""
        messages = render(ToolResult(Json({"a": 1}), id="call_1", json=None))

        assert messages[0].has_tool_result_json is True
        assert messages[0].tool_result_json is None

    def test_error_flag(self):
        """is_error marks the result as failed."""
        messages = render(ToolResult("boom", id="call_1", is_error=True))

        assert messages[0].tool_result_is_error is True
        assert messages[0].to_dict()["toolResultIsError"] is True


class TestControlFlow:
    """Tests for If, Show, Each and Fragment."""

    def test_if_true_renders_children(self):
        """Children render when the condition holds."""
        messages = render(User("Hi", If("!", condition=True)))

        assert messages[0].content == "Hi!"

    def test_if_false_renders_nothing(self):
        """Nothing renders when the condition fails."""
        messages = render(User("Hi", If("!", condition=False)))

        assert messages[0].content == "Hi"

    def test_show_fallback(self):
        """Show renders its fallback when `when` is falsy."""
        messages = render(User(Show("Welcome back", when=False, fallback="Please log in")))

        assert messages[0].content == "Please log in"

    def test_each_preserves_order(self):
        """Each renders items in order with their index."""
        messages = render(User(Each(["a", "b"], lambda item, i: f"{i + 1}. {item}\n")))

        assert messages[0].content == "1. a\n2. b"

    def test_fragment_is_transparent(self):
        """Fragments add no structure."""
        messages = render(User(Fragment("a", Fragment("b")), Linebreak(), "c"))

        assert messages[0].content == "ab\nc"


class TestData:
    """Tests for Json and File rendering."""

    def test_json_inline(self):
        """Json renders compact text."""
        messages = render(User("Data: ", Json({"name": "Alice", "age": 30})))

        assert messages[0].content == 'Data: {"name":"Alice","age":30}'

    def test_json_pretty(self):
        """Pretty Json is indented."""
        messages = render(User(Json({"a": 1}, pretty=True)))

        assert messages[0].content == '{\n  "a": 1\n}'

    def test_file_part_after_text(self):
        """Text part comes first, then file parts."""
        messages = render(User("Look at this", File(url="https://example.com/cat.png")))

        assert messages[0].content == "Look at this"
        assert messages[0].parts == (
            TextPart("Look at this"),
            FilePart(type="image", mime_type="image/png", data="https://example.com/cat.png", is_url=True),
        )

    def test_file_only_has_no_text_part(self):
        """No text part is added when text is empty."""
        messages = render(User(File(base64="QUJD", mime_type="application/pdf", filename="a.pdf")))

        assert messages[0].parts == (
            FilePart(type="file", mime_type="application/pdf", data="QUJD", filename="a.pdf"),
        )

    def test_markdown_blocks_separate_from_text(self):
        """Block-level helpers end with a newline."""
        messages = render(User(Heading("Title"), "Body"))

        assert messages[0].content == "## Title\nBody"


class TestGroup:
    """Tests for Group block formatting."""

    def test_block_mode(self):
        """Block mode indents the body between tag lines."""
        messages = render(User(Group("Some content", tag="schema")))

        assert messages[0].content == "<schema>\n  Some content\n</schema>"

    def test_following_text_starts_new_line(self):
        """Text after a block group begins on its own line."""
        messages = render(User(Group("a", tag="x"), "after"))

        assert messages[0].content == "<x>\n  a\n</x>\nafter"

    def test_nested_groups_compound_indent(self):
        """Nested block groups indent once per level."""
        messages = render(User(Group(Group("deep", tag="inner"), tag="outer")))

        assert messages[0].content == (
            "<outer>\n"
            "  <inner>\n"
            "    deep\n"
            "  </inner>\n"
            "</outer>"
        )

    def test_blank_lines_not_indented(self):
        """Empty lines stay empty."""
        messages = render(User(Group("line1\n\nline2", tag="x", indent=4)))

        assert messages[0].content == "<x>\n    line1\n\n    line2\n</x>"

    def test_zero_indent(self):
        """indent=0 leaves the body unindented."""
        messages = render(User(Group("a", tag="x", indent=0)))

        assert messages[0].content == "<x>\na\n</x>"

    def test_inline_mode(self):
        """Inline mode adds no whitespace."""
        messages = render(User("Name: ", Group("John", tag="name", inline=True), "."))

        assert messages[0].content == "Name: <name>John</name>."

    def test_group_outside_message_dropped(self):
        """A group with no open message renders nothing."""
        assert render(Group("x", tag="t")) == []

    def test_file_inside_group_kept(self):
        """File parts inside a block group reach the message."""
        messages = render(User(Group("See image", File(url="https://e.com/a.png"), tag="ctx")))

        assert messages[0].parts[0] == TextPart("<ctx>\n  See image\n</ctx>")
        assert messages[0].parts[1].data == "https://e.com/a.png"

    def test_render_to_string(self):
        """render_to_string keeps the trailing newline."""
        assert render_to_string(Group("content", tag="schema")) == "<schema>\n  content\n</schema>\n"


class TestNative:
    """Tests for native passthrough."""

    def test_native_message(self):
        """Native content is carried verbatim."""
        native = {"role": "user", "content": [{"type": "text", "text": "Hi"}]}

        messages = render(Native(native))

        assert messages[0].is_native is True
        assert messages[0].content == ""
        assert messages[0].native_content is native
        assert messages[0].to_dict()["nativeContent"] is native


class TestExtensibility:
    """Tests for components, unknown kinds and handler coverage."""

    def test_every_kind_has_handler(self):
        """Every built-in marker kind is dispatched."""
        assert set(PromptRenderer().handled_kinds) == set(ElementKind)

    def test_unknown_kind_transparent(self):
        """Unknown kinds render their children."""
        messages = render(User(create_element("custom-thing", None, "hi")))

        assert messages[0].content == "hi"

    def test_component_function_invoked(self):
        """Component functions receive attributes and children."""
        def Greeting(name, children):
            return [f"Hello {name}", *children]

        messages = render(User(create_element(Greeting, {"name": "Ada"}, "!")))

        assert messages[0].content == "Hello Ada!"

    def test_component_children_attribute_overridden(self):
        """Walked children replace a `children` attribute."""
        def Wrapper(children):
            return ["[", *children, "]"]

        messages = render([User(create_element(Wrapper, {"children": "x"}, "y"))])

        assert messages[0].content == "[y]"

    def test_conditional_outside_wrap_user_dropped(self):
        """Deferred functions only apply inside WrapUser."""
        messages = render(User("a", lambda ctx: "b"))

        assert messages[0].content == "a"

    def test_render_to_content(self):
        """Fragments render to untrimmed text plus parts."""
        result = render_to_content(["Hello ", File(url="https://example.com/a.png")])

        assert result.content == "Hello "
        assert result.parts[0].type == "image"

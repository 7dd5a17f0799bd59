"""Component-to-Dart emission rules.

Every component type has one pure emission rule ``(component, schema) -> str``
that turns the component's position, size, properties and actions into a
self-contained Flutter widget snippet.  Snippets start at column 0; the screen
template indents them into place.

Rules are total: missing or invalid properties fall back to the defaults of
the type's property model, a form bound to an unknown table emits a comment
naming the table, and an unknown component type emits a placeholder comment.
None of them raises on user data.
"""

from __future__ import annotations

import re
import textwrap
from typing import Callable, cast

from sigma_codegen.spec.models import (
    ButtonProperties,
    Component,
    ComponentType,
    ContainerProperties,
    DatabaseField,
    DatabaseSchema,
    FieldType,
    FormProperties,
    ImageProperties,
    InputProperties,
    ListProperties,
    TextProperties,
)
from sigma_codegen.templating.helpers import camel_case, capitalize, pascal_case

EmissionRule = Callable[[Component, DatabaseSchema], str]

NOOP_HANDLER = "() {}"

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

TEXT_ALIGNMENTS: dict[str, str] = {
    "left": "TextAlign.left",
    "center": "TextAlign.center",
    "right": "TextAlign.right",
    "justify": "TextAlign.justify",
}

KEYBOARD_TYPES: dict[str, str] = {
    "email": "TextInputType.emailAddress",
    "number": "TextInputType.number",
    "phone": "TextInputType.phone",
    "url": "TextInputType.url",
    "multiline": "TextInputType.multiline",
}

FIELD_KEYBOARD_TYPES: dict[FieldType, str] = {
    FieldType.EMAIL: "TextInputType.emailAddress",
    FieldType.INTEGER: "TextInputType.number",
    FieldType.FLOAT: "const TextInputType.numberWithOptions(decimal: true)",
    FieldType.DECIMAL: "const TextInputType.numberWithOptions(decimal: true)",
    FieldType.CURRENCY: "const TextInputType.numberWithOptions(decimal: true)",
    FieldType.URL: "TextInputType.url",
    FieldType.PHONE: "TextInputType.phone",
    FieldType.TEXT: "TextInputType.multiline",
    FieldType.DATE: "TextInputType.datetime",
    FieldType.DATETIME: "TextInputType.datetime",
    FieldType.TIME: "TextInputType.datetime",
}

BOX_FITS = frozenset({"fill", "contain", "cover", "fitWidth", "fitHeight", "none", "scaleDown"})

REQUIRED_VALIDATOR = "(value) => (value == null || value.isEmpty) ? 'Required' : null"


# ---------------------------------------------------------------------------
# Dart literal helpers
# ---------------------------------------------------------------------------

def dart_string(value: object) -> str:
    """Quote *value* as a single-quoted Dart string literal."""
    text = (
        str(value)
        .replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("$", "\\$")
        .replace("\r", "")
        .replace("\n", "\\n")
    )
    return f"'{text}'"


def dart_color(value: object, fallback: str) -> str:
    """``"#2196F3"`` -> ``Color(0xFF2196F3)``; invalid input uses *fallback*."""
    match = _HEX_COLOR.match(str(value).strip()) or _HEX_COLOR.match(fallback)
    digits = match.group(1).upper() if match else "FF000000"
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) == 6:
        digits = "FF" + digits
    return f"Color(0x{digits})"


def dart_num(value: int | float) -> str:
    """Render a number without a spurious ``.0`` for integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def dart_identifier(name: str, fallback: str) -> str:
    """Return *name* if it is a valid identifier, else its camelCase form."""
    if _IDENTIFIER.match(name):
        return name
    return camel_case(name) or fallback


def title_case(value: str) -> str:
    """``"first_name"`` -> ``"First Name"``; used for form labels."""
    words = re.split(r"[\s_\-]+", value.strip())
    return " ".join(capitalize(word.lower()) for word in words if word)


def navigation_call(component: Component, trigger: str) -> str | None:
    """Statement navigating to the target of *trigger*, if it is a navigate action.

    Targets are emitted verbatim and are not checked against the app's screens.
    """
    action = component.find_action(trigger)
    if action is None or action.type != "navigate" or not action.target:
        return None
    route = "/" + action.target.lstrip("/")
    return f"Navigator.pushNamed(context, {dart_string(route)});"


def action_handler(component: Component, trigger: str) -> str:
    """Closure literal for *trigger*: a navigation call or a no-op."""
    call = navigation_call(component, trigger)
    return f"() {{ {call} }}" if call else NOOP_HANDLER


def _block(lines: list[str]) -> str:
    return "\n".join(lines)


def _indent(text: str, width: int) -> str:
    return textwrap.indent(text, " " * width)


def positioned(component: Component, child: str | None, decoration: str | None = None) -> str:
    """Wrap *child* in a ``Positioned`` + sized ``Container`` at the component's origin."""
    left, top = component.origin()
    width, height = component.dimensions()
    body = [f"width: {dart_num(width)},", f"height: {dart_num(height)},"]
    if decoration:
        body.append(f"decoration: {decoration},")
    if child:
        body.append(f"child: {child},")
    return _block([
        "Positioned(",
        f"  left: {dart_num(left)},",
        f"  top: {dart_num(top)},",
        "  child: Container(",
        _indent(_block(body), 4),
        "  ),",
        ")",
    ])


# ---------------------------------------------------------------------------
# Emission rules
# ---------------------------------------------------------------------------

def emit_text(component: Component, schema: DatabaseSchema) -> str:
    props = cast(TextProperties, component.props())
    weight = props.font_weight.strip().lower()
    if weight == "bold":
        font_weight = "FontWeight.bold"
    elif weight in {"100", "200", "300", "400", "500", "600", "700", "800", "900"}:
        font_weight = f"FontWeight.w{weight}"
    else:
        font_weight = "FontWeight.normal"
    child = _block([
        "Text(",
        f"  {dart_string(props.text)},",
        "  style: TextStyle(",
        f"    fontSize: {dart_num(props.font_size)},",
        f"    color: {dart_color(props.color, '#000000')},",
        f"    fontWeight: {font_weight},",
        "  ),",
        f"  textAlign: {TEXT_ALIGNMENTS.get(props.text_align, 'TextAlign.left')},",
        ")",
    ])
    return positioned(component, child)


def emit_button(component: Component, schema: DatabaseSchema) -> str:
    props = cast(ButtonProperties, component.props())
    child = _block([
        "ElevatedButton(",
        f"  onPressed: {action_handler(component, 'onPressed')},",
        "  style: ElevatedButton.styleFrom(",
        f"    backgroundColor: {dart_color(props.background_color, '#2196F3')},",
        "    shape: RoundedRectangleBorder(",
        f"      borderRadius: BorderRadius.circular({dart_num(props.border_radius)}),",
        "    ),",
        "  ),",
        "  child: Text(",
        f"    {dart_string(props.text)},",
        f"    style: TextStyle(color: {dart_color(props.text_color, '#FFFFFF')}),",
        "  ),",
        ")",
    ])
    return positioned(component, child)


def emit_image(component: Component, schema: DatabaseSchema) -> str:
    props = cast(ImageProperties, component.props())
    fit = props.fit if props.fit in BOX_FITS else "cover"
    image = _block([
        "Image.network(",
        f"  {dart_string(props.url)},",
        f"  fit: BoxFit.{fit},",
        "  errorBuilder: (context, error, stackTrace) {",
        "    return Container(",
        "      color: Colors.grey[300],",
        "      child: Icon(Icons.image, color: Colors.grey[600]),",
        "    );",
        "  },",
        ")",
    ])
    if navigation_call(component, "onTap"):
        image = _block([
            "GestureDetector(",
            f"  onTap: {action_handler(component, 'onTap')},",
            f"  child: {_indent(image, 2).lstrip()},",
            ")",
        ])
    return positioned(component, image)


def emit_input(component: Component, schema: DatabaseSchema) -> str:
    props = cast(InputProperties, component.props())
    keyboard = KEYBOARD_TYPES.get(props.input_type, "TextInputType.text")
    child = _block([
        "TextField(",
        "  decoration: InputDecoration(",
        f"    hintText: {dart_string(props.placeholder)},",
        "    border: const OutlineInputBorder(),",
        "  ),",
        f"  keyboardType: {keyboard},",
        f"  obscureText: {'true' if props.is_password else 'false'},",
        ")",
    ])
    return positioned(component, child)


def emit_list(component: Component, schema: DatabaseSchema) -> str:
    props = cast(ListProperties, component.props())
    model = pascal_case(props.data_source) or "Item"
    title = dart_identifier(props.title_field, "name")
    subtitle = dart_identifier(props.subtitle_field, "description")
    child = _block([
        f"StreamBuilder<QuerySnapshot<{model}>>(",
        f"  stream: Amplify.DataStore.observeQuery({model}.classType),",
        "  builder: (context, snapshot) {",
        "    if (!snapshot.hasData) {",
        "      return const Center(child: CircularProgressIndicator());",
        "    }",
        "    final items = snapshot.data!.items;",
        "    return ListView.builder(",
        "      itemCount: items.length,",
        "      itemBuilder: (context, index) {",
        "        final item = items[index];",
        "        return ListTile(",
        f"          title: Text('${{item.{title}}}'),",
        f"          subtitle: Text('${{item.{subtitle}}}'),",
        f"          onTap: {action_handler(component, 'onTap')},",
        "        );",
        "      },",
        "    );",
        "  },",
        ")",
    ])
    return positioned(component, child)


def _form_field(field: DatabaseField) -> str:
    lines = [
        "TextFormField(",
        f"  decoration: InputDecoration(labelText: {dart_string(title_case(field.name))}),",
    ]
    keyboard = FIELD_KEYBOARD_TYPES.get(field.logical_type) if field.logical_type else None
    if keyboard:
        lines.append(f"  keyboardType: {keyboard},")
    if field.logical_type is FieldType.PASSWORD:
        lines.append("  obscureText: true,")
    if field.required:
        lines.append(f"  validator: {REQUIRED_VALIDATOR},")
    lines.append("),")
    return _block(lines)


def emit_form(component: Component, schema: DatabaseSchema) -> str:
    props = cast(FormProperties, component.props())
    table = schema.find_table(props.table_name)
    if table is None:
        return f"// Table {_comment_text(props.table_name)} not found in schema"

    form_key = dart_string(component.id or f"{props.table_name}-form")
    on_submit = navigation_call(component, "onSubmit") or "// Submit form"
    children = [_form_field(field) for field in table.user_fields()]
    children.append(_block([
        "ElevatedButton(",
        "  onPressed: () {",
        f"    if (_formKeys[{form_key}]!.currentState!.validate()) {{",
        f"      {on_submit}",
        "    }",
        "  },",
        f"  child: Text({dart_string(props.submit_label)}),",
        "),",
    ]))
    child = _block([
        "Form(",
        f"  key: _formKeys.putIfAbsent({form_key}, () => GlobalKey<FormState>()),",
        "  child: SingleChildScrollView(",
        "    child: Column(",
        "      children: [",
        _indent(_block(children), 8),
        "      ],",
        "    ),",
        "  ),",
        ")",
    ])
    return positioned(component, child)


def emit_container(component: Component, schema: DatabaseSchema) -> str:
    props = cast(ContainerProperties, component.props())
    if props.border_width:
        border = (
            f"Border.all(width: {dart_num(props.border_width)}, "
            f"color: {dart_color(props.border_color, '#000000')})"
        )
    else:
        border = "null"
    decoration = _block([
        "BoxDecoration(",
        f"  color: {dart_color(props.background_color, '#FFFFFF')},",
        f"  borderRadius: BorderRadius.circular({dart_num(props.border_radius)}),",
        f"  border: {border},",
        ")",
    ])
    return positioned(component, None, decoration=decoration)


def _comment_text(value: str) -> str:
    return " ".join(str(value).split())


def emit_unknown(component: Component, schema: DatabaseSchema) -> str:
    return f"// Unknown component type: {_comment_text(component.type)}"


EMISSION_RULES: dict[ComponentType, EmissionRule] = {
    ComponentType.TEXT: emit_text,
    ComponentType.BUTTON: emit_button,
    ComponentType.IMAGE: emit_image,
    ComponentType.INPUT: emit_input,
    ComponentType.LIST: emit_list,
    ComponentType.FORM: emit_form,
    ComponentType.CONTAINER: emit_container,
}


def emit_component(component: Component, schema: DatabaseSchema) -> str:
    """Dispatch *component* to its emission rule."""
    kind = component.kind
    rule = EMISSION_RULES.get(kind) if kind else None
    return (rule or emit_unknown)(component, schema)

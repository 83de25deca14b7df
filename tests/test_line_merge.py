from label_engine.services.fonts import FontHandle
from label_engine.services.label_types import LabelContent, LineConfiguration, Margin, PartLabelTemplate
from label_engine.services.line_merge import merge_adjacent_lines, split_text, truncate_to_width

DESCRIPTION = (
    "  Low power dual operational amplifier, 8-pin DIP, 3V to 32V single supply, "
    "internally frequency compensated, large DC voltage gain  "
)


def _font_factory(registry, size=8):
    family = registry.install_default()
    return lambda line, text: FontHandle(family, size)


def test_truncate_to_width(registry, measurer):
    font = FontHandle(registry.install_default(), 8)
    fitted = truncate_to_width(DESCRIPTION.strip(), font, 200, measurer)
    assert DESCRIPTION.strip().startswith(fitted)
    assert measurer.measure(fitted, font).width <= 200
    assert truncate_to_width("anything", font, 0, measurer) == ""


def test_split_text_reconstructs_a_prefix(registry, measurer):
    font = FontHandle(registry.install_default(), 8)
    first, second = split_text(DESCRIPTION, font, lambda _: font, 300, measurer)
    trimmed = DESCRIPTION.strip()
    assert first and second
    assert measurer.measure(first, font).width <= 300
    assert measurer.measure(second, font).width <= 300
    assert trimmed.startswith(first)
    assert trimmed[len(first):].strip().startswith(second)
    # the rest does not fit on two lines and is dropped
    assert len(first) + len(second) < len(trimmed)


def test_split_text_short_text_stays_on_first_line(registry, measurer):
    font = FontHandle(registry.install_default(), 8)
    assert split_text("  LM358  ", font, lambda _: font, 400, measurer) == ("LM358", "")


def test_split_text_whitespace_only(registry, measurer):
    font = FontHandle(registry.install_default(), 8)
    assert split_text("   ", font, lambda _: font, 400, measurer) == ("", "")
    assert split_text(None, font, lambda _: font, 400, measurer) == ("", "")


def test_merge_only_applies_to_identical_templates(registry, measurer):
    template = PartLabelTemplate(
        line1=LineConfiguration(content="{partNumber}"),
        line2=LineConfiguration(content="{description}"),
        line3=LineConfiguration(content="{description}"),
        line4=LineConfiguration(content="{manufacturer}"),
    )
    content = LabelContent(line1="LM358", line2=DESCRIPTION, line3=DESCRIPTION, line4="TI")
    merged = merge_adjacent_lines(template, content, 475, Margin(), _font_factory(registry), measurer)
    assert merged is not content
    assert merged.line1 == "LM358"
    assert merged.line4 == "TI"
    assert merged.line3
    assert measurer.measure(merged.line2, FontHandle(registry.install_default(), 8)).width <= 475
    # input snapshot is left alone
    assert content.line2 == DESCRIPTION


def test_merge_available_width_excludes_margins(registry, measurer):
    template = PartLabelTemplate(
        line1=LineConfiguration(content="{description}"),
        line2=LineConfiguration(content="{description}"),
    )
    content = LabelContent(line1=DESCRIPTION, line2=DESCRIPTION)
    font = FontHandle(registry.install_default(), 8)
    merged = merge_adjacent_lines(template, content, 475, Margin(left=100, right=100),
                                  _font_factory(registry), measurer)
    assert measurer.measure(merged.line1, font).width <= 275


def test_merge_pairs_run_in_slot_order(registry, measurer):
    template = PartLabelTemplate(
        line1=LineConfiguration(content="{description}"),
        line2=LineConfiguration(content="{description}"),
        line3=LineConfiguration(content="{description}"),
        line4=LineConfiguration(content=""),
    )
    content = LabelContent(line1=DESCRIPTION, line2=DESCRIPTION, line3=DESCRIPTION, line4="")
    merged = merge_adjacent_lines(template, content, 475, Margin(), _font_factory(registry), measurer)
    # pair (1, 2) already fitted line 2, so pair (2, 3) has nothing left for line 3
    assert merged.line2
    assert merged.line3 == ""

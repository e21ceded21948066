"""
Single-line prompt shown in the message bar of the tte text editor.
"""
import curses.ascii

from tte import keys

def prompt(context, template: str, callback=None, accept_keys=()):
    """
    Read a line of text in the message bar. `template` holds a `{}` placeholder
    that shows the text typed so far.

    `callback(text, key)` (optional) runs after every key. It receives ESCAPE
    when the prompt is cancelled, and ENTER or one of `accept_keys` when it is
    accepted. Enter needs some text; `accept_keys` accept the text as it is.

    Returns the entered text, or None if the user pressed Escape.
    """
    text = ""
    while True:
        context.set_status_message(template.format(text))
        context.ui.refresh_screen(context)
        key = context.read_key()

        if key in (keys.Key.DELETE, keys.CTRL_H, keys.BACKSPACE):
            text = text[:-1]
        elif key == keys.ESCAPE:
            context.set_status_message("")
            if callback is not None:
                callback(text, key)
            return None
        elif (key == keys.ENTER and text) or key in accept_keys:
            context.set_status_message("")
            if callback is not None:
                callback(text, key)
            return text
        elif key < 128 and curses.ascii.isprint(key):
            text += chr(key)

        if callback is not None:
            callback(text, key)

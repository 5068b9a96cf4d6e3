import logging

from parsables import *


@command
def echo(context, arguments=Cardinal(nargs="*", descr="the words to echo back"), /):
    """
    Echo my arguments.

    Every argument is written on its own line, between markers, so surrounding
    spaces are easy to spot.
    """
    for index, argument in enumerate(arguments):
        context.write("%d: «%s»\n" % (index, argument))


@command(name="exit")
def exit_(context, /):
    """Exit the program."""
    context.done = True


@command
def elucidate(context, /):
    """Explain a topic in great detail and possibly at great length."""
    context.write("Nah, I'm good.\n")


@command
def help(context, name=Cardinal(nargs="?", descr="the command to describe"), /):
    """Get some help."""
    if name is None:
        context.write(registry.summary(40))
    elif name in registry:
        context.write(registry.detail(name, 40) + "\n")
    else:
        context.write("No such command: %s\n" % name)


registry = Registry((echo, exit_, help, elucidate))


if __name__ == '__main__':
    logging.basicConfig(level=logging.WARNING)
    Session(registry).loop()

from argvoy import *

name = StringValue("World")
loud = BoolValue()


def greet(input, output):
    greeting = f"Hello, {name.value}!"
    output.print(greeting.upper() if loud.value else greeting)


application = Application(
    "greeter",
    "0.1.0",
    descr="Greets the given user, or the world.",
    colorful=True,
    commands=[
        Command(
            "greet",
            alias="hi",
            descr="Greet the given user, or the world.",
            help="You don't have to specify a name.",
            configure=lambda definition: (
                definition.add_option(name, "-n, --name[=NAME]", "Provide a name for the greeting.", env="GREETER_NAME"),
                definition.add_option(loud, "-l, --loud", "Shout the greeting."),
            ),
            execute=greet,
        ),
    ],
)


if __name__ == '__main__':
    raise SystemExit(application.run())

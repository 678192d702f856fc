from appy.commands import help_cmd, calc, echo, joke, weather, timer

ALL_COMMANDS = [help_cmd, calc, echo, joke, weather, timer]

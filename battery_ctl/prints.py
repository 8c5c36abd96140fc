import click

BLOCK_WIDTH = 60
ERROR_COLOR, INFO_COLOR = "red", "blue"

def print_block(title:str, *lines:object, color=None) -> None:
    """Print lines under a centered title, closed by a rule. Colors are dropped when stdout is not a tty."""
    click.echo()
    click.secho(f' {title} '.center(BLOCK_WIDTH, '─'), fg=color)
    click.echo()
    for line in lines: click.echo(line)
    click.secho('─'*BLOCK_WIDTH, fg=color)

def print_info_block(info_title:str, *lines:object) -> None: print_block(info_title+' infos', *lines, color=INFO_COLOR)

def print_error(*values:object) -> None:
    click.echo(click.style('Error', fg=ERROR_COLOR)+': '+' '.join(map(str, values)), err=True)

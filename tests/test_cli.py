'''
Command line interface tests
'''

from scicalc.cli import CLI


def run(capsys, *args):
    CLI().run(args=list(args))
    return capsys.readouterr().out


def test_expressions(capsys):
    assert run(capsys, '-e', '2 + 3 * 4', 'pow(2, 10)') \
        == 'Result: 14\nResult: 1024\n'


def test_degrees(capsys):
    assert run(capsys, '-d', '-e', 'sin(90)') == 'Result: 1\n'


def test_bad_line_does_not_stop_the_rest(capsys):
    assert run(capsys, '-e', '1/0', '2 # 3', '1 + 1') == 'Result: 2\n'


def test_exit_stops(capsys):
    assert run(capsys, '-e', '1', 'exit', '2') == 'Result: 1\n'


def test_state_carries_across_lines(capsys):
    out = run(capsys, '-e', 'mode deg', 'm+ 90', 'sin(M)')
    assert out.splitlines() == ['Angle mode set to DEGREES',
                                'Memory slot added to: 90',
                                'Result: 1']


def test_dump(capsys):
    out = run(capsys, '-D', '-e', '-3+4')
    assert out.splitlines() == ['<kind>\t<repr(text)>',
                                "operator\t'-'",
                                "number\t'3'",
                                "operator\t'+'",
                                "number\t'4'",
                                'rpn\t3 uminus 4 +']


def test_raw_grammar(capsys):
    assert '(?<number>' in run(capsys, '-G', '-e')

'''
Session (command loop) tests
'''

from scicalc.util import LexError, MismatchedParentheses, SessionError
from scicalc.machine import AngleMode
from scicalc.session import HELP, History, Session

from pytest import raises


def test_expression(session):
    assert session.feed('2 + 3') == 'Result: 5'
    assert session.feed('1/3') == 'Result: 0.3333333333'
    assert session.feed('2 ^ 40') == 'Result: 1.099511628e+12'


def test_blank_lines(session):
    assert session.feed('') is None
    assert session.feed('   \n') is None
    assert len(session.history) == 0


def test_exit(session):
    assert not session.done
    session.feed('QUIT')
    assert session.done
    assert Session().feed('exit') is None


def test_help(session):
    assert session.feed('?') == HELP
    assert session.feed('Help') == HELP


def test_angle_mode(session):
    assert session.feed('mode') == 'Angle mode is RADIANS'
    assert session.feed('mode deg') == 'Angle mode set to DEGREES'
    assert session.angle_mode is AngleMode.DEGREES
    assert session.feed('sin(90)') == 'Result: 1'
    assert session.feed('MODE RAD') == 'Angle mode set to RADIANS'
    assert session.feed('sin(0)') == 'Result: 0'
    with raises(SessionError, match='Unknown angle mode'):
        session.feed('mode grad')


def test_start_in_degrees():
    assert Session(angle_mode=AngleMode.DEGREES).feed('acos(0)') \
        == 'Result: 90'


def test_memory(session):
    assert session.feed('m+ 5') == 'Memory slot added to: 5'
    assert session.feed('M * 2') == 'Result: 10'
    assert session.feed('m- 2*3') == 'Memory slot subtracted from: 6'
    assert session.feed('mr') == 'Memory recall: -1'
    assert session.feed('m+ -M') == 'Memory slot added to: 1'
    assert session.memory == 0
    session.feed('m+7')
    assert session.feed('mc') == 'Memory cleared'
    assert session.feed('mr') == 'Memory recall: 0'


def test_memory_commands_stay_out_of_history(session):
    session.feed('m+ 1')
    session.feed('mr')
    session.feed('mode deg')
    assert len(session.history) == 0


def test_invalid_memory_operation(session):
    with raises(SessionError, match='Invalid memory operation'):
        session.feed('m+')
    with raises(SessionError, match='Invalid memory operation'):
        session.feed('m- 1/0')
    assert session.memory == 0


def test_history_skips_lines_which_do_not_tokenize(session):
    with raises(LexError):
        session.feed('2 # 3')
    assert len(session.history) == 0


def test_history_keeps_lines_which_fail_later(session):
    with raises(MismatchedParentheses):
        session.feed('(2 + 3')
    assert list(session.history) == ['(2 + 3']


def test_show_history(session):
    session.feed('1 + 1')
    session.feed('2 + 2')
    session.feed('3 + 3')
    assert session.feed('h') == '1: 1 + 1\n2: 2 + 2\n3: 3 + 3'
    assert session.feed('h 2') == '2: 2 + 2\n3: 3 + 3'
    assert session.feed('h 0') is None
    with raises(SessionError):
        session.feed('h two')


def test_recall(session):
    session.feed('1 + 1')
    session.feed('2 * 3')
    assert session.feed('!!') == '2 * 3\nResult: 6'
    assert session.feed('!1') == '1 + 1\nResult: 2'
    assert len(session.history) == 4
    with raises(SessionError, match='No such history entry'):
        session.feed('!9')
    with raises(SessionError):
        session.feed('!x')


def test_recall_without_history(session):
    with raises(SessionError, match='No history'):
        session.feed('!!')


def test_recall_sees_current_memory(session):
    session.feed('M + 1')
    session.feed('m+ 10')
    assert session.feed('!!') == 'M + 1\nResult: 11'


def test_history_is_bounded():
    history = History(capacity=3)
    for line in 'abcde':
        history.add(line)
    assert history.last() == [(1, 'c'), (2, 'd'), (3, 'e')]
    assert history[1] == 'c'
    assert History().entries.maxlen == History.CAPACITY


def test_show_more_history_than_there_is(session):
    session.feed('1')
    assert session.feed('h 5') == '1: 1'

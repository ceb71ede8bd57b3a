# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Reports and report collection for decoding diagnostics

Decoding a NIfTI-1 buffer either fails with an exception (see
:mod:`niftinrrd.errors`) or succeeds, possibly in a degraded mode.  Every
degraded-mode decision is recorded as a :class:`Report` in a :class:`Reports`
collector that travels with the decoded result, so callers can tell a clean
decode from one where fields were truncated, defaulted or omitted.

>>> reports = Reports()
>>> with LoggingOutputSuppressor():
...     rep = reports.add(30, 'dim[0] out of range')
>>> reports.max_level
30
>>> reports.messages()
['dim[0] out of range']

Post-decode consistency checks are callables of signature
``func(obj, fix=False)`` returning a tuple ``(obj, Report)``, run in order by
a :class:`BatteryRunner`:

>>> def chk(obj, fix=False): # minimal check
...     return obj, Report()
>>> btrun = BatteryRunner((chk,))
>>> reports = btrun.check_only('a string')
>>> reports[0].problem_level
0
"""
from . import imageglobals
from .imageglobals import LoggingOutputSuppressor  # noqa: F401


class BatteryRunner:
    """Class to run set of checks"""

    def __init__(self, checks):
        """Initialize instance from sequence of `checks`

        Parameters
        ----------
        checks : sequence
           sequence of checks, where checks are callables matching
           signature ``obj, rep = chk(obj, fix=False)``.  Checks are run
           in the order they are passed.
        """
        self._checks = checks

    def check_only(self, obj):
        """Run checks on `obj` returning a :class:`Reports` sequence"""
        reports = Reports()
        for check in self._checks:
            obj, rep = check(obj, False)
            reports.append(rep)
        return reports

    def __len__(self):
        return len(self._checks)


class Report:
    def __init__(self, error=Exception, problem_level=0, problem_msg='', fix_msg=''):
        """Initialize report with values

        Parameters
        ----------
        error : None or Exception
           Error to raise if raising error for this report.  If None,
           no error can be raised for this report.
        problem_level : int
           level of problem.  From 0 (no problem) to 50 (severe
           problem).  Default is 0
        problem_msg : string
           String describing problem detected. Default is ''
        fix_msg : string
           String describing how decoding recovered, for example which
           default was used.  Default is ''.

        Examples
        --------
        >>> rep = Report()
        >>> rep.problem_level
        0
        >>> rep = Report(TypeError, 10)
        >>> rep.problem_level
        10
        """
        self.error = error
        self.problem_level = problem_level
        self.problem_msg = problem_msg
        self.fix_msg = fix_msg

    def __getstate__(self):
        """State that defines object

        Returns
        -------
        tup : tuple
        """
        return self.error, self.problem_level, self.problem_msg, self.fix_msg

    def __eq__(self, other):
        """are two reports equal?

        >>> Report(problem_level=10) == Report(problem_level=10)
        True
        >>> Report(problem_level=10) == Report(problem_level=20)
        False
        """
        try:
            return self.__getstate__() == other.__getstate__()
        except AttributeError:
            return False

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return f'Report(level={self.problem_level}, message={self.message!r})'

    @property
    def message(self):
        """formatted message string, including fix message if present"""
        if self.fix_msg:
            return '; '.join((self.problem_msg, self.fix_msg))
        return self.problem_msg

    def log_raise(self, logger, error_level=40):
        """Log problem, raise error if problem >= `error_level`

        Parameters
        ----------
        logger : log
           log object, implementing ``log`` method
        error_level : int, optional
           If ``self.problem_level`` >= `error_level`, raise error
        """
        logger.log(self.problem_level, self.message)
        if self.problem_level and self.problem_level >= error_level:
            if self.error:
                raise self.error(self.problem_msg)


class Reports(list):
    """Ordered collection of :class:`Report` objects for one decode

    Reports added with :meth:`add` are logged straight away through
    ``imageglobals.logger``, and raised if their level reaches
    ``imageglobals.error_level``.
    """

    def add(self, problem_level, problem_msg, error=Exception, fix_msg=''):
        """Record, log and maybe raise a new problem report

        Returns
        -------
        report : Report
            the report appended to this collection
        """
        report = Report(error, problem_level, problem_msg, fix_msg)
        self.append(report)
        report.log_raise(imageglobals.logger, imageglobals.error_level)
        return report

    def problems(self, min_level=1):
        """Reports with ``problem_level`` at or above `min_level`"""
        return [rep for rep in self if rep.problem_level >= min_level]

    def messages(self, min_level=1):
        return [rep.message for rep in self.problems(min_level)]

    @property
    def max_level(self):
        """Highest problem level collected, 0 if nothing went wrong"""
        return max((rep.problem_level for rep in self), default=0)

    @property
    def degraded(self):
        """True if any report flags a degraded-mode decode"""
        return self.max_level >= imageglobals.DEGRADED

    def write_raise(self, stream, error_level=40, log_level=30):
        """Write reports at or above `log_level` to `stream`

        Parameters
        ----------
        stream : file-like
           implementing ``write`` method
        error_level : int, optional
           level at which to raise error for problem detected
        log_level : int, optional
           Such that if `log_level` is >= a report's ``problem_level`` we
           write the report to `stream`, otherwise we write nothing.
        """
        for rep in self:
            if rep.problem_level >= log_level:
                stream.write(f'Level {rep.problem_level}: {rep.message}\n')
            if rep.problem_level and rep.problem_level >= error_level:
                if rep.error:
                    raise rep.error(rep.problem_msg)

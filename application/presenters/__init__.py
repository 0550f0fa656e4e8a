from .rates import PresenterState, RateDisplay, RatePresenter, build_presenter

__all__ = ['PresenterState', 'RateDisplay', 'RatePresenter', 'build_presenter']

from .plots import plot_maf_distribution, plot_liability, plot_ld_heatmap, plot_roc

__all__ = ['plot_maf_distribution', 'plot_liability', 'plot_ld_heatmap', 'plot_roc']

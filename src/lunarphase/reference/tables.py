"""
Coefficient tables for the solar/lunar series, after Reingold & Dershowitz,
*Calendrical Calculations: The Ultimate Edition* (Cambridge, 2018), ch. 14.

Copied verbatim; row order matters for reproducing the sample data.
"""

from __future__ import annotations

from typing import Tuple

# Table 14.1 (solar-longitude): (x, y, z) -> x * sin(y + z*c)
SOLAR_LONGITUDE_TABLE: Tuple[Tuple[float, float, float], ...] = (
    (403406.0, 270.54861, 0.9287892),
    (195207.0, 340.19128, 35999.1376958),
    (119433.0, 63.91854, 35999.4089666),
    (112392.0, 331.2622, 35998.7287385),
    (3891.0, 317.843, 71998.20261),
    (2819.0, 86.631, 71998.4403),
    (1721.0, 240.052, 36000.35726),
    (660.0, 310.26, 71997.4812),
    (350.0, 247.23, 32964.4678),
    (334.0, 260.87, -19.441),
    (314.0, 297.82, 445267.1117),
    (268.0, 343.14, 45036.884),
    (242.0, 166.79, 3.1008),
    (234.0, 81.53, 22518.4434),
    (158.0, 3.5, -19.9739),
    (132.0, 132.75, 65928.9345),
    (129.0, 182.95, 9038.0293),
    (114.0, 162.03, 3034.7684),
    (99.0, 29.8, 33718.148),
    (93.0, 266.4, 3034.448),
    (86.0, 249.2, -2280.773),
    (78.0, 157.6, 29929.992),
    (72.0, 257.8, 31556.493),
    (68.0, 185.1, 149.588),
    (64.0, 69.9, 9037.75),
    (46.0, 8.0, 107997.405),
    (38.0, 197.1, -4444.176),
    (37.0, 250.4, 151.771),
    (32.0, 65.3, 67555.316),
    (29.0, 162.7, 31556.08),
    (28.0, 341.5, -4561.54),
    (27.0, 291.6, 107996.706),
    (27.0, 98.5, 1221.655),
    (25.0, 146.7, 62894.167),
    (24.0, 110.0, 31437.369),
    (21.0, 5.2, 14578.298),
    (21.0, 342.6, -31931.757),
    (20.0, 230.9, 34777.243),
    (18.0, 256.1, 1221.999),
    (17.0, 45.3, 62894.511),
    (14.0, 242.9, -4442.039),
    (13.0, 115.2, 107997.909),
    (13.0, 151.8, 119.066),
    (13.0, 285.3, 16859.071),
    (12.0, 53.3, -4.578),
    (10.0, 126.6, 26895.292),
    (10.0, 205.7, -39.127),
    (10.0, 85.9, 12297.536),
    (10.0, 146.1, 90073.778),
)

# Table 14.3 (nth-new-moon): (v, w, x, y, z)
#   v * E**w * sin(x*solar_anomaly + y*lunar_anomaly + z*moon_argument)
NTH_NEW_MOON_CORRECTION_TABLE: Tuple[Tuple[float, int, float, float, float], ...] = (
    (-0.4072, 0, 0.0, 1.0, 0.0),
    (0.17241, 1, 1.0, 0.0, 0.0),
    (0.01608, 0, 0.0, 2.0, 0.0),
    (0.01039, 0, 0.0, 0.0, 2.0),
    (0.00739, 1, -1.0, 1.0, 0.0),
    (-0.00514, 1, 1.0, 1.0, 0.0),
    (0.00208, 2, 2.0, 0.0, 0.0),
    (-0.00111, 0, 0.0, 1.0, -2.0),
    (-0.00057, 0, 0.0, 1.0, 2.0),
    (0.00056, 1, 1.0, 2.0, 0.0),
    (-0.00042, 0, 0.0, 3.0, 0.0),
    (0.00042, 1, 1.0, 0.0, 2.0),
    (0.00038, 1, 1.0, 0.0, -2.0),
    (-0.00024, 1, -1.0, 2.0, 0.0),
    (-0.00007, 0, 2.0, 1.0, 0.0),
    (0.00004, 0, 0.0, 2.0, -2.0),
    (0.00004, 0, 3.0, 0.0, 0.0),
    (0.00003, 0, 1.0, 1.0, -2.0),
    (0.00003, 0, 0.0, 2.0, 2.0),
    (-0.00003, 0, 1.0, 1.0, 2.0),
    (0.00003, 0, -1.0, 1.0, 2.0),
    (-0.00002, 0, -1.0, 1.0, -2.0),
    (-0.00002, 0, 1.0, 3.0, 0.0),
    (0.00002, 0, 0.0, 4.0, 0.0),
)

# Table 14.4 (nth-new-moon): (i, j, l) -> l * sin(i + j*k)
NTH_NEW_MOON_ADDITIONAL_TABLE: Tuple[Tuple[float, float, float], ...] = (
    (251.88, 0.016321, 0.000165),
    (251.83, 26.651886, 0.000164),
    (349.42, 36.412478, 0.000126),
    (84.66, 18.206239, 0.00011),
    (141.74, 53.303771, 0.000062),
    (207.14, 2.453732, 0.00006),
    (154.84, 7.30686, 0.000056),
    (34.52, 27.261239, 0.000047),
    (207.19, 0.121824, 0.000042),
    (291.34, 1.844379, 0.00004),
    (161.72, 24.198154, 0.000037),
    (239.56, 25.513099, 0.000035),
    (331.55, 3.592518, 0.000023),
)

# Table 14.5 (lunar-longitude): (v, w, x, y, z), v in microdegrees
#   v * E**|x| * sin(w*elongation + x*solar_anomaly + y*lunar_anomaly + z*moon_node)
LUNAR_LONGITUDE_CORRECTION_TABLE: Tuple[Tuple[float, float, int, float, float], ...] = (
    (6288774.0, 0.0, 0, 1.0, 0.0),
    (1274027.0, 2.0, 0, -1.0, 0.0),
    (658314.0, 2.0, 0, 0.0, 0.0),
    (213618.0, 0.0, 0, 2.0, 0.0),
    (-185116.0, 0.0, 1, 0.0, 0.0),
    (-114332.0, 0.0, 0, 0.0, 2.0),
    (58793.0, 2.0, 0, -2.0, 0.0),
    (57066.0, 2.0, -1, -1.0, 0.0),
    (53322.0, 2.0, 0, 1.0, 0.0),
    (45758.0, 2.0, -1, 0.0, 0.0),
    (-40923.0, 0.0, 1, -1.0, 0.0),
    (-34720.0, 1.0, 0, 0.0, 0.0),
    (-30383.0, 0.0, 1, 1.0, 0.0),
    (15327.0, 2.0, 0, 0.0, -2.0),
    (-12528.0, 0.0, 0, 1.0, 2.0),
    (10980.0, 0.0, 0, 1.0, -2.0),
    (10675.0, 4.0, 0, -1.0, 0.0),
    (10034.0, 0.0, 0, 3.0, 0.0),
    (8548.0, 4.0, 0, -2.0, 0.0),
    (-7888.0, 2.0, 1, -1.0, 0.0),
    (-6766.0, 2.0, 1, 0.0, 0.0),
    (-5163.0, 1.0, 0, -1.0, 0.0),
    (4987.0, 1.0, 1, 0.0, 0.0),
    (4036.0, 2.0, -1, 1.0, 0.0),
    (3994.0, 2.0, 0, 2.0, 0.0),
    (3861.0, 4.0, 0, 0.0, 0.0),
    (3665.0, 2.0, 0, -3.0, 0.0),
    (-2689.0, 0.0, 1, -2.0, 0.0),
    (-2602.0, 2.0, 0, -1.0, 2.0),
    (2390.0, 2.0, -1, -2.0, 0.0),
    (-2348.0, 1.0, 0, 1.0, 0.0),
    (2236.0, 2.0, -2, 0.0, 0.0),
    (-2120.0, 0.0, 1, 2.0, 0.0),
    (-2069.0, 0.0, 2, 0.0, 0.0),
    (2048.0, 2.0, -2, -1.0, 0.0),
    (-1773.0, 2.0, 0, 1.0, -2.0),
    (-1595.0, 2.0, 0, 0.0, 2.0),
    (1215.0, 4.0, -1, -1.0, 0.0),
    (-1110.0, 0.0, 0, 2.0, 2.0),
    (-892.0, 3.0, 0, -1.0, 0.0),
    (-810.0, 2.0, 1, 1.0, 0.0),
    (759.0, 4.0, -1, -2.0, 0.0),
    (-713.0, 0.0, 2, -1.0, 0.0),
    (-700.0, 2.0, 2, -1.0, 0.0),
    (691.0, 2.0, 1, -2.0, 0.0),
    (596.0, 2.0, -1, 0.0, -2.0),
    (549.0, 4.0, 0, 1.0, 0.0),
    (537.0, 0.0, 0, 4.0, 0.0),
    (520.0, 4.0, -1, 0.0, 0.0),
    (-487.0, 1.0, 0, -2.0, 0.0),
    (-399.0, 2.0, 1, 0.0, -2.0),
    (-381.0, 0.0, 0, 2.0, -2.0),
    (351.0, 1.0, 1, 1.0, 0.0),
    (-340.0, 3.0, 0, -2.0, 0.0),
    (330.0, 4.0, 0, -3.0, 0.0),
    (327.0, 2.0, -1, 2.0, 0.0),
    (-323.0, 0.0, 2, 1.0, 0.0),
    (299.0, 1.0, 1, -1.0, 0.0),
    (294.0, 2.0, 0, 3.0, 0.0),
)

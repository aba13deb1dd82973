"""Hand-authored chunk templates.

Every template is an 11x22 block of glyphs (see ``chunks.GLYPH_LEGEND``).
Templates are validated when the registry loads them: each must connect the
six edge connectors either as one region or as a top and a bottom region,
otherwise the herringbone layout could seal parts of the map off.

Connectors, as (x, y) inside the template::

    top:    (0, 3)   (7, 0)    (10, 7)
    bottom: (0, 16)  (5, 21)   (10, 14)

Keep the connector cells open when editing a template.
"""

from __future__ import annotations

from warrens.environment.chunks import Biome

# (biome, minimum depth, template text)
TEMPLATES: tuple[tuple[Biome, int, str], ...] = (
    # Forest cottage
    (
        Biome.OVERLAND,
        0,
        """
%%%%%%%,%%%
%%%%%,,,,%%
%%,,,,,,,%%
,,,,######%
%%,,#..T.#%
%%,,+....|%
%%,,#....#%
%%,,##+##,,
%%%,,,,,,,%
%%%%,,;;,%%
%%,,,;;;,,%
%,,~~~,,,%%
%,~~==~~,,%
%,~===~~,,%
%,,~~~,,,,,
%%,,,,,,,%%
,,,,,%%,,%%
%%,,,%%%,%%
%%%,,,,,,%%
%%%%,,,,%%%
%%%%%,,%%%%
%%%%%,,%%%%
""",
    ),
    # Menhir circle
    (
        Biome.OVERLAND,
        0,
        """
%%%%%%,,%%%
%%%%%,,,%%%
%%,,,,,,%%%
,,,,,,,%,,%
%%,,,,,%%,%
%/%,,,,,%%%
%%%%/%%,/%%
%%%%%%%,,,,
%%%%%%,,/%%
%%%%%,,%%%%
%///..//%%%
%/.A..../%%
%.A>.A..,%%
%./.a../%,%
%%.A..A/%,,
%%...A,,%%%
,,,,,//%/%%
%%%,,%%%%%%
%%%%,%%/%%%
%%%%%,%%%%%
%%%%%,,%%%%
%%%%%,,%%%%
""",
    ),
    # Lake crossing
    (
        Biome.OVERLAND,
        0,
        """
%%%%%%%,%%%
%%%%%%,,,%%
%%%%,,,,,%%
,,,,,,,,,%%
%%,,%%,,,%%
%%%%%,,,%%%
%%%%%%,,%,%
%%%o,,,,,,,
%%%~~%%,,,%
,~%~~~o,,~%
~~=====~~~=
~==========
~====~~~~,%
,,%~~~%%%,%
,%%%%,,,,,,
,,,,,,,,,,%
,,,,,,,%%%%
%%%,,,%%%%%
%%%%,,,%%%%
%%%%%,,,%%%
%%%%%,,%%%%
%%%%%,,%%%%
""",
    ),
    # Farmstead
    (
        Biome.OVERLAND,
        0,
        """
,,,,,,,,,,,
,######|##,
,#..#....#,
,|..+..T.|,
,#..#....#,
,##+######,
,#....#,,x,
,|.T..+,,,,
,#....#,%x,
,###|##,,x,
,,,,,xb,,x,
,,,%,xx,xx%
,,%,,,,,%%%
,,,,,,,,,%%
,,,%,;,,,,,
,,,,;;;,,,,
,%,;;~~,,,,
%%,;~~~~~,,
%,,;~~~~~,%
,,,,~~~,,,%
,,,,,,,,%%%
,,,,,,,%%%%
""",
    ),
    # Crypt
    (
        Biome.DUNGEON,
        1,
        """
#######.###
#######+###
##......###
.+......###
##......###
##g.....###
##......###
##g.....+..
##......###
###+#######
###.#######
###.#######
###.#######
###.#######
###........
#####.#####
......#####
#####.#####
#####.#####
#####.#####
#####.#####
#####.#####
""",
    ),
    # Split hall
    (
        Biome.DUNGEON,
        1,
        """
#######.###
#######.###
##.......##
.........##
##.......##
##...#...##
##.......##
##.........
##.......##
###########
###########
###########
####...####
###.....###
###........
###.....###
........###
###.....###
####...####
#####.#####
#####.#####
#####.#####
""",
    ),
    # Pillared hall
    (
        Biome.DUNGEON,
        2,
        """
#######.###
#######+###
##.......##
.+...#...##
##..###..##
##...#...##
##.#...#.##
##.......+.
##.......##
##.#...#.##
##.......##
##.......##
##.#...#.##
##.......##
##.......+.
##.#...#.##
.+...#...##
##..###..##
##...#...##
##.......##
#####+#####
#####.#####
""",
    ),
    # Magma cave
    (
        Biome.DUNGEON,
        3,
        """
*******.***
****#...***
#####...#**
.......##**
##.....#***
*..##..#***
**..#++##**
**#|#......
**....!..**
**..!.....*
**..XX..!.*
**!.XXX..**
**...XX..**
**X......**
**XXXXX....
**.XXX...**
.......X.**
**..!..XX**
***....XX**
****..**XX*
*****.*XXX*
*****.*****
""",
    ),
    # Flooded cells
    (
        Biome.DUNGEON,
        2,
        """
#######.###
#######.###
#######.###
........###
#.......###
#.......###
#.......###
#..........
###=====###
###=====###
###=====###
###=====###
###IIIII###
###.....###
###........
###.....###
........###
###.....###
###.....###
###.....###
#####.#####
#####.#####
""",
    ),
    # Shrine
    (
        Biome.DUNGEON,
        1,
        """
#######.###
#######.###
###.....###
....>....##
###.....###
####...####
######.####
######.....
###########
***********
***********
***********
###########
####...####
###.......,
###..b.b###
.....a..###
###..b.b###
####...####
#####.#####
#####.#####
#####.#####
""",
    ),
)

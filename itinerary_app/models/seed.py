"""
Seed itinerary loaded once at startup.
"""
from .itinerary import DayPlan, TravelItem, ItemType


INITIAL_PLAN: tuple[DayPlan, ...] = (
    DayPlan(
        id="pre-trip",
        date="出行准备",
        weekday="Checklist",
        items=[
            TravelItem(
                id="pre-1",
                time="待办",
                title="预订酒店",
                type=ItemType.HOTEL,
                description="建议入住同一家酒店 (3晚)。第一晚酒店待议。",
                tips=["比价不同平台", "确认入住时间"],
            ),
            TravelItem(
                id="pre-2",
                time="待办",
                title="购买往返车票",
                type=ItemType.TRANSPORT,
                description="高铁或机票",
            ),
        ],
    ),
    DayPlan(
        id="day-1",
        date="12月21日",
        weekday="周六",
        items=[
            TravelItem(
                id="1-2",
                time="Daytime",
                title="太仓阿尔卑斯雪世界",
                type=ItemType.ACTIVITY,
                description="滑雪行程。",
                address="太仓阿尔卑斯国际度假区",
                tips=[
                    "高铁：到【太仓南站】下车，距离雪场仅1km，步行或打车极近",
                    "雪票：双人大概 ¥600",
                    "行程：滑完雪后直接返回上海市区酒店",
                ],
                cost="¥600 (2人)",
            ),
        ],
    ),
    DayPlan(
        id="day-2",
        date="12月22日",
        weekday="周日",
        items=[
            TravelItem(
                id="2-1",
                time="Daytime",
                title="电影：疯狂动物城2",
                type=ItemType.ACTIVITY,
                description="周日放松行程，看电影《疯狂动物城2》。下午安排 KTV 唱歌。",
                location_name="市区影院 (待定)",
            ),
            TravelItem(
                id="2-2",
                time="Dinner",
                title="我家餐厅",
                type=ItemType.FOOD,
                description="上海本帮菜。",
                address="上海市静安区华山路229弄7号",
                tips=[
                    "交通：静安寺地铁站11号口出，步行140米",
                    "建议提前取号或确认排队情况",
                ],
            ),
        ],
    ),
    DayPlan(
        id="day-3",
        date="12月23日",
        weekday="周一",
        items=[
            TravelItem(
                id="3-1",
                time="Daytime",
                title="Citywalk / 自由活动",
                type=ItemType.ACTIVITY,
                description="白天行程待定，可以在市区周边逛逛。",
            ),
            TravelItem(
                id="3-2",
                time="Dinner",
                title="兰心餐厅 (进贤路店)",
                type=ItemType.FOOD,
                description="米其林一星本帮菜，口味偏甜。只推荐进贤路这家老店。",
                address="进贤路130号",
                tips=[
                    "营业时间：11:00-14:00 (13:30截单) / 17:00-21:00 (21:00截单)",
                    "避雷：工作日18:30前去基本不排队，翻台快",
                    "停车：无免费停车，路边贴条。建议停【花园饭店】 (20元/时, 步行5min)",
                    "菜品：推荐【干烧鲳鱼】。口感偏甜，不建议点太多荤菜",
                    "注意：只收现金 (最好备好)，装修较老",
                ],
            ),
            TravelItem(
                id="3-3",
                time="Evening",
                title="外滩源德国圣诞集市",
                type=ItemType.ACTIVITY,
                description="圆明园路步行街，拍照出片。",
                address="上海市黄浦区圆明园路步行街",
                warning="严重警告：资料显示该集市【周一/周二休息】！今天是周一，请务必核实或调整至周日前往！",
                cost="¥30/人 (预售)",
                tips=[
                    "入口：北京东路圆明园路路口",
                    "时间：周三-周五 15-22点 / 周六日 12-22点 (周一二闭园)",
                    "亮点：晚上19点后有圣诞树人工降雪",
                    "美食：热红酒、德国香肠、超大棉花糖",
                    "交通：地铁2号线南京东路站 / 12号线天潼路站",
                ],
            ),
        ],
    ),
)
